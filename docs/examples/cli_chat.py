import asyncio
import os
from datetime import datetime
from typing import Annotated, List

from dotenv import load_dotenv
from pydantic import Field

from generic_llm_provider import (
    AssistantMessage,
    OpenAIProvider,
    ProviderRequest,
    ToolExecutionMode,
    ToolRegistry,
    UserMessage,
    setup_logging,
)
from generic_llm_provider.llm_core import Message

# Load environment variables
load_dotenv()

registry = ToolRegistry()


@registry.tool
def current_time(timezone: Annotated[str, Field(description="IANA timezone name, e.g. 'Europe/Berlin'")] = "UTC") -> str:
    """Returns the current date and time."""
    return f"{datetime.now().isoformat(timespec='seconds')} ({timezone})"


async def main() -> None:
    """
    Main function to run the CLI chat using OpenAI with tool execution enabled.
    """
    setup_logging()
    print("Welcome to the CLI Chat (OpenAI)!")

    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        print("Error: OPENAI_API_KEY not found in environment variables.")
        return

    provider = OpenAIProvider(tool_executor=registry, execution_mode=ToolExecutionMode.SYNC)
    history: List[Message] = []

    print("\nStart chatting! Type 'exit' or 'quit' to stop.")
    while True:
        user_input = input("\nYou: ").strip()
        if user_input.lower() in ["exit", "quit"]:
            print("Goodbye!")
            break

        if not user_input:
            continue

        history.append(UserMessage(content=user_input))
        request = ProviderRequest(
            system_prompt="You are a helpful assistant.",
            messages=history,
            tools=registry.definitions(),
            api_key=api_key,
        )

        try:
            response = await provider.execute_request(request)
            print(f"Assistant: {response.content}")
            print(f"(tokens: {response.tokens.total})")
            history.append(AssistantMessage(content=response.content))

        except Exception as e:
            print(f"An error occurred: {e}")


if __name__ == "__main__":
    asyncio.run(main())
