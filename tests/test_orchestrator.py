import asyncio

import httpx
import pytest

from agents import OrchestratorAgent
from agents.general_agent.prompts import CAPABILITIES_MENU
from agents.shared.state import AgentContext, Intent, UserProfileContext
from shared.generation import TextGenerationService


def _context():
    return AgentContext(user_id=1, user_profile=UserProfileContext(name="Maya", major="History"))


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "message",
    [
        "I want to kill myself",
        "I'm stressed about my exam and I want to die",
        "What clubs should I join? honestly I'm SUICIDAL",
    ],
)
async def test_crisis_always_routes_to_emergency(fake_generation, message):
    service = fake_generation(fail=True)
    router = OrchestratorAgent(service)

    reply = await router.process_message(message, _context())

    assert reply.intent == Intent.EMERGENCY
    assert reply.handler_name == "WellnessAgent"
    assert reply.confidence == 1.0
    assert "988" in reply.content and "741741" in reply.content
    assert reply.crisis_detected is True
    assert reply.show_emergency_popup is True
    assert service.network_calls == 0


@pytest.mark.asyncio
async def test_club_question_routes_to_campus_life(fake_generation):
    service = fake_generation(responses=["Try the hiking club."])

    reply = await OrchestratorAgent(service).process_message("What clubs should I join?", _context())

    assert reply.intent == Intent.CAMPUS_LIFE
    assert reply.handler_name == "CampusLifeAgent"
    assert reply.content == "Try the hiking club."
    assert service.classify_calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "message",
    [
        "I'm stressed about my exam schedule",
        "I'm stressed about my exam",
        "I feel lonely in my dorm",
    ],
)
async def test_wellness_wins_keyword_ties(fake_generation, message):
    reply = await OrchestratorAgent(fake_generation()).process_message(message, _context())

    assert reply.intent == Intent.WELLNESS
    assert reply.handler_name == "WellnessAgent"


@pytest.mark.asyncio
async def test_academic_beats_campus_life(fake_generation):
    decision = await OrchestratorAgent(fake_generation()).classify_intent(
        "When is the deadline to change my class schedule?", _context()
    )

    assert decision.intent == Intent.ACADEMIC
    assert decision.matched_by == "keyword"


@pytest.mark.asyncio
async def test_unmatched_message_uses_classifier(fake_generation):
    service = fake_generation(classification="academic")
    router = OrchestratorAgent(service)

    decision = await router.classify_intent("Which prerequisites does organic chem need?", _context())

    assert decision.intent == Intent.ACADEMIC
    assert decision.handler_name == "AcademicAgent"
    assert decision.matched_by == "classifier"
    assert service.classify_calls[0]["categories"] == ["academic", "wellness", "campus_life", "general"]


@pytest.mark.asyncio
async def test_gibberish_with_llm_down_gets_canned_general_reply(fake_chat_model):
    llm = fake_chat_model(error=httpx.ConnectError("connection refused"))
    router = OrchestratorAgent(TextGenerationService(llm))

    first = await router.process_message("asdkjfh", _context())
    second = await router.process_message("asdkjfh", _context())

    assert first.intent == Intent.GENERAL
    assert first.handler_name == "GeneralAgent"
    assert first.content == CAPABILITIES_MENU
    assert first.confidence == pytest.approx(0.6)
    assert (second.intent, second.content) == (first.intent, first.content)


@pytest.mark.asyncio
async def test_danger_flag_does_not_change_handler(fake_generation):
    reply = await OrchestratorAgent(fake_generation()).process_message(
        "My roommate keeps threatening me", _context()
    )

    assert reply.intent == Intent.CAMPUS_LIFE
    assert reply.danger_detected is True
    assert reply.show_emergency_popup is True


@pytest.mark.asyncio
async def test_unexpected_error_becomes_apology(fake_generation, monkeypatch):
    router = OrchestratorAgent(fake_generation())

    async def explode(message, context):
        raise RuntimeError("boom")

    monkeypatch.setattr(router.academic_agent, "process", explode)

    reply = await router.process_message("Help me with my homework", _context())

    assert reply.confidence == 0.0
    assert reply.intent == Intent.GENERAL
    assert reply.handler_name == "OrchestratorAgent"
    assert reply.metadata.agent_type == "error"
    assert "trouble processing" in reply.content


def test_stop_generation_delegates_to_service(fake_generation):
    service = fake_generation()

    router = OrchestratorAgent(service)
    router.stop_generation(7)
    router.stop_generation()

    assert service.stop_calls == [7, None]


@pytest.mark.asyncio
async def test_stop_only_cancels_the_callers_generation(fake_chat_model):
    service = TextGenerationService(fake_chat_model(hang=True))
    router = OrchestratorAgent(service)

    first = asyncio.create_task(router.process_message("How do I study for my exam?", AgentContext(user_id=1)))
    second = asyncio.create_task(router.process_message("How do I study for my exam?", AgentContext(user_id=2)))
    for _ in range(50):
        if service.in_flight() == 2:
            break
        await asyncio.sleep(0.01)

    assert router.stop_generation(1) == 1
    stopped = await first
    assert "fallback-response" in stopped.tools_used
    assert not second.done()
    assert service.in_flight(2) == 1

    assert router.stop_generation(2) == 1
    await second


@pytest.mark.asyncio
async def test_stop_without_owner_cancels_everything(fake_chat_model):
    service = TextGenerationService(fake_chat_model(hang=True))
    router = OrchestratorAgent(service)

    tasks = [
        asyncio.create_task(router.process_message("Help with my essay", AgentContext(user_id=user_id)))
        for user_id in (1, 2)
    ]
    for _ in range(50):
        if service.in_flight() == 2:
            break
        await asyncio.sleep(0.01)

    assert router.stop_generation() == 2
    replies = await asyncio.gather(*tasks)
    assert all(reply.confidence == pytest.approx(0.5) for reply in replies)


def test_advisors_lists_handlers_in_routing_order(fake_generation):
    advisors = OrchestratorAgent(fake_generation()).advisors()

    assert [a["name"] for a in advisors] == ["WellnessAgent", "AcademicAgent", "CampusLifeAgent", "GeneralAgent"]
    assert [a["intent"] for a in advisors] == ["wellness", "academic", "campus_life", "general"]
    assert all(a["description"] for a in advisors)
