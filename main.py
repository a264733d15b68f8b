"""Main CLI entrypoint for the campus advisor."""
import asyncio
import os
import argparse

from dotenv import load_dotenv

# Load environment variables from .env file BEFORE importing modules that depend on them
load_dotenv()

from shared.config import Configuration
from shared.generation import TextGenerationService
from agents import OrchestratorAgent
from agents.orchestrator import enable_chat_logging
from app.persistence import load_context, record_exchange
from database import init_db, store


def _resolve_user(user_id: int | None) -> dict:
    """Use the given student, or create a local demo one."""
    if user_id is not None:
        user = store.get_user(user_id)
        if user is None:
            raise SystemExit(f"No user with id {user_id}")
        return user
    user = store.get_user_by_email("cli@localhost")
    return user or store.create_user("CLI Student", "cli@localhost")


async def main(enable_logging: bool = False, log_level: str = "info", user_id: int | None = None):
    """Run the interactive chat loop."""
    print("=" * 60)
    print("Campus Advisor")
    print("=" * 60)
    print()
    if enable_logging:
        level = {"debug": 10, "info": 20, "warning": 30, "error": 40}.get(log_level.lower(), 20)
        enable_chat_logging(level=level)
        print(f"Logging enabled at level: {log_level.upper()}")

    # Initialize configuration
    try:
        config = Configuration()
        config.validate()
    except ValueError as e:
        print(f"Configuration error: {e}")
        print("\nPlease ensure:")
        print("1. LOCAL_LLM_URL points at your LM Studio / Ollama server")
        print("2. You have a model_config.json file (or use defaults)")
        return

    print(f"Using model: {config.llm_model}")
    print(f"Endpoint: {config.llm_base_url}")
    print()

    init_db()
    user = _resolve_user(user_id)
    orchestrator = OrchestratorAgent(TextGenerationService.from_config(config))

    print(f"Chatting as {user['name']} (id={user['id']}).")
    print("Type 'quit', 'exit', or 'q' to end.")
    print("Type 'reset' to clear conversation history.")
    print("Type 'help' for usage tips.")
    print("-" * 60)
    print()

    # Chat timeout is configurable via CHAT_TIMEOUT (sec); default relates to LLM timeout
    chat_timeout_env = os.getenv("CHAT_TIMEOUT")
    if chat_timeout_env and chat_timeout_env.isdigit():
        chat_timeout = int(chat_timeout_env)
    else:
        # Allow a little more than one LLM call: classification plus the reply
        chat_timeout = max(config.llm_timeout * 2, 60)

    # Chat loop
    while True:
        try:
            user_input = input("You: ").strip()

            if not user_input:
                continue

            # Handle special commands
            if user_input.lower() in ['quit', 'exit', 'q']:
                print("\nGoodbye!")
                break

            if user_input.lower() == 'reset':
                store.clear_conversation(user["id"])
                print("Chat history cleared.\n")
                continue

            if user_input.lower() == 'help':
                print("\nAvailable commands:")
                print("  - quit/exit/q: Exit the chat")
                print("  - reset: Clear conversation history")
                print("  - help: Show this help message")
                print("\nThe advisors can:")
                print("  - Help with studying and exams (try: 'How should I study for my chemistry exam?')")
                print("  - Support your wellbeing (try: 'I feel overwhelmed this week')")
                print("  - Suggest campus activities (try: 'What clubs should I join?')")
                print()
                continue

            print("\nAdvisor: ", end="", flush=True)
            context = load_context(user["id"], history_limit=config.history_limit)
            try:
                reply = await asyncio.wait_for(
                    orchestrator.process_message(user_input, context), timeout=chat_timeout
                )
            except asyncio.TimeoutError:
                print(
                    f"Request timed out after {chat_timeout}s. The endpoint may be slow or unreachable. "
                    "Try again, increase CHAT_TIMEOUT/LOCAL_LLM_TIMEOUT, or check LOCAL_LLM_URL."
                )
                print()
                continue

            recorded = record_exchange(user["id"], user_input, reply)
            print(reply.content)
            tools = ", ".join(recorded["tools_used"]) or "none"
            print(f"  [{reply.intent.value} via {reply.handler_name}, confidence {reply.confidence:.2f}, tools: {tools}]")
            if reply.show_emergency_popup:
                print("  If you are in danger, call 911. Call or text 988 any time for support.")
            print()

        except KeyboardInterrupt:
            print("\n\nGoodbye!")
            break


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Campus Advisor chat")
    parser.add_argument("--log", action="store_true", help="Enable chat logging to console and logs/chat.log")
    parser.add_argument("--log-level", default="info", choices=["debug", "info", "warning", "error"], help="Logging level when --log is set")
    parser.add_argument("--user-id", type=int, default=None, help="Chat as an existing user instead of the CLI demo user")
    args = parser.parse_args()
    asyncio.run(main(enable_logging=args.log, log_level=args.log_level, user_id=args.user_id))
