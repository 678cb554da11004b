"""Demonstrates registering another OpenAI-compatible backend."""

import asyncio
import os

from tars import Dialect, ProviderOptions, from_messages, from_user, new_provider, register_dialect

GROQ = Dialect(
    name="groq",
    base_url="https://api.groq.com/openai/v1",
    path="/chat/completions",
    default_model="llama-3.1-8b-instant",
)


async def main() -> None:
    register_dialect(GROQ)

    provider = new_provider("groq", ProviderOptions(api_key=os.environ.get("GROQ_API_KEY")))
    reply = await provider.invoke(from_messages(from_user("Hello, world!")))
    print(f"Provider: {provider.name}")
    print(f"Response: {reply.content}")


if __name__ == "__main__":
    asyncio.run(main())
