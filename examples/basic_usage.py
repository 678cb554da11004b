"""Basic usage of tars with a template and variable substitution."""

import asyncio
import os

from tars import InvokeOptions, ProviderOptions, from_messages, from_system, from_user, new_provider


async def main() -> None:
    provider = new_provider(
        "openai",
        ProviderOptions(api_key=os.environ.get("OPENAI_API_KEY"), timeout=30, max_attempts=3, max_delay=1.0),
    )

    prompt = from_messages(
        from_system("You are a concise geography tutor."),
        from_user("What is the capital of {{country}}?"),
    )

    for country in ("France", "Japan"):
        reply = await provider.invoke(
            prompt.invoke({"country": country}),
            InvokeOptions(temperature=0.2, max_tokens=100),
        )
        print(f"{country}: {reply.content}")
        print(f"  tokens: {reply.usage.total_tokens}")


if __name__ == "__main__":
    asyncio.run(main())
