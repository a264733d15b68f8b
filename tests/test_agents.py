import pytest

from agents import AcademicAgent, CampusLifeAgent, GeneralAgent, WellnessAgent
from agents.general_agent.prompts import CAPABILITIES_MENU, HELP_REPLY, THANKS_REPLY
from agents.shared.state import AgentContext, ConversationTurn, UserProfileContext, WellnessMetadata


def _context(**profile):
    history = [ConversationTurn(role="user" if i % 2 == 0 else "assistant", content=f"turn {i}") for i in range(8)]
    return AgentContext(
        user_id=1,
        user_profile=UserProfileContext(**profile) if profile else None,
        conversation_history=history,
    )


def test_context_prompt_orders_profile_history_and_question(fake_generation):
    agent = AcademicAgent(fake_generation())
    context = _context(name="Maya", major="Biology", interests=["chess", "hiking"], stress_level=7)

    prompt = agent.build_context_prompt("How do I prepare for organic chemistry?", context)

    assert prompt.startswith("User Profile:\n- Name: Maya\n- Major: Biology\n")
    assert "- Year:" not in prompt
    assert "- Interests: chess, hiking" in prompt
    assert "- Stress Level: 7/10" in prompt
    # Only the last five turns, oldest first
    assert "turn 2" not in prompt
    assert prompt.index("Student: turn 4") < prompt.index("Advisor: turn 7")
    assert prompt.index("Advisor: turn 7") < prompt.index("Current Question: How do I prepare")
    assert prompt.endswith("Response:")


def test_context_prompt_without_profile_or_history(fake_generation):
    agent = CampusLifeAgent(fake_generation())

    prompt = agent.build_context_prompt("Where is the gym?", AgentContext(user_id=3))

    assert prompt == "Current Question: Where is the gym?\n\nResponse:"


def test_general_agent_uses_wider_history_window(fake_generation):
    agent = GeneralAgent(fake_generation())

    prompt = agent.build_context_prompt("anything", _context(name="Maya"))

    assert prompt.startswith("Student Profile:")
    assert "turn 2" in prompt
    assert "turn 1" not in prompt


@pytest.mark.asyncio
async def test_academic_agent_makes_one_generation_call(fake_generation):
    service = fake_generation(responses=["Use active recall."])
    agent = AcademicAgent(service)

    reply = await agent.process("How should I study for my exam?", _context(name="Maya"))

    assert reply.content == "Use active recall."
    assert reply.confidence == 0.85
    assert reply.metadata.agent_type == "academic"
    assert len(service.generate_calls) == 1
    call = service.generate_calls[0]
    assert call["temperature"] == 0.7
    assert call["max_tokens"] == 512
    assert "academic advisor" in call["system_prompt"]


@pytest.mark.asyncio
async def test_domain_agent_falls_back_when_generation_fails(fake_generation):
    agent = CampusLifeAgent(fake_generation(fail=True))

    reply = await agent.process("How do I make a friend on campus?", _context())

    assert "Making friends in college takes time" in reply.content
    assert reply.confidence == 0.5
    assert reply.tools_used == ["fallback-response"]


def test_capability_probes_overlap_on_schedule(fake_generation):
    service = fake_generation()
    context = AgentContext(user_id=1)

    assert AcademicAgent(service).can_handle("my class schedule", context)
    assert CampusLifeAgent(service).can_handle("my class schedule", context)
    assert not WellnessAgent(service).can_handle("my class schedule", context)


@pytest.mark.asyncio
async def test_wellness_crisis_reply_is_local(fake_generation):
    service = fake_generation()
    agent = WellnessAgent(service)

    reply = await agent.process("I feel like I want to end my life", _context(name="Maya"))

    assert service.network_calls == 0
    assert reply.confidence == 1.0
    assert reply.content.startswith("Maya, I hear")
    assert "988" in reply.content
    assert "741741" in reply.content
    assert isinstance(reply.metadata, WellnessMetadata)
    assert reply.metadata.crisis_detected is True
    assert reply.metadata.severity == "critical"
    assert reply.tools_used == ["crisis-detection", "crisis-intervention"]


@pytest.mark.asyncio
async def test_wellness_crisis_reply_without_profile_addresses_friend(fake_generation):
    reply = await WellnessAgent(fake_generation()).process("I'm suicidal", AgentContext(user_id=9))

    assert reply.content.startswith("friend, I hear")


@pytest.mark.asyncio
async def test_wellness_agent_reports_stress_and_danger(fake_generation):
    service = fake_generation(responses=["Let's take this one step at a time."])
    agent = WellnessAgent(service)

    reply = await agent.process("I'm overwhelmed and feeling unsafe at home", _context())

    assert reply.confidence == 0.9
    assert reply.detected_stress_level == 8
    assert reply.show_emergency_popup is True
    assert reply.crisis_detected is False
    assert reply.tools_used == ["danger-detection", "stress-detection"]
    assert len(service.generate_calls) == 1


@pytest.mark.asyncio
async def test_wellness_agent_without_stress_signal(fake_generation):
    reply = await WellnessAgent(fake_generation()).process("Any meditation tips?", _context())

    assert reply.detected_stress_level is None
    assert reply.show_emergency_popup is False
    assert reply.tools_used == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "message, expected",
    [
        ("What can you do?", HELP_REPLY),
        ("thanks a lot", THANKS_REPLY),
        ("asdkjfh", CAPABILITIES_MENU),
    ],
)
async def test_general_agent_canned_replies(fake_generation, message, expected):
    reply = await GeneralAgent(fake_generation(fail=True)).process(message, AgentContext(user_id=1))

    assert reply.content == expected
    assert reply.confidence == 0.6


@pytest.mark.asyncio
async def test_general_agent_greets_by_name_when_offline(fake_generation):
    context = AgentContext(user_id=1, user_profile=UserProfileContext(name="Sam"))

    reply = await GeneralAgent(fake_generation(fail=True)).process("hello there", context)

    assert reply.content.startswith("Hi Sam!")


@pytest.mark.asyncio
async def test_general_agent_online_reply(fake_generation):
    service = fake_generation(responses=["College is a journey."])

    reply = await GeneralAgent(service).process("Tell me something", AgentContext(user_id=1))

    assert reply.content == "College is a journey."
    assert reply.confidence == 0.8
    assert service.generate_calls[0]["max_tokens"] == 400


def test_stress_level_labels_are_accepted():
    assert UserProfileContext(stress_level="High").stress_level == "high"
    assert UserProfileContext(stress_level="6").stress_level == 6
    with pytest.raises(ValueError):
        UserProfileContext(stress_level=11)
