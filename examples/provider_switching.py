"""Demonstrates zero-code provider switching via env vars.

Run with different .env configurations:

  # OpenAI
  LLM_PROVIDER=openai
  OPENAI_API_KEY=sk-...

  # Local Ollama (no API key needed)
  LLM_PROVIDER=ollama
  LLM_MODEL=llama3.1:8b

The code below is IDENTICAL regardless of provider.
"""

import asyncio

from tars import MessageError, TarsSettings, build_provider, from_messages, from_user


async def main() -> None:
    settings = TarsSettings()
    provider = build_provider(settings)

    try:
        reply = await provider.invoke(
            from_messages(from_user("Say hello!")),
            settings.invoke_options(),
        )
    except MessageError as exc:
        print(f"{provider.name} failed during {exc.operation}: {exc.reason}")
        return

    print(f"Provider: {provider.name}")
    print(f"Response: {reply.content}")


if __name__ == "__main__":
    asyncio.run(main())
