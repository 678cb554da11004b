"""Structured output: the reply is decoded straight into a pydantic model."""

import asyncio
import os

from pydantic import BaseModel

from tars import InvokeOptions, ProviderOptions, from_messages, from_system, from_user, new_provider


class WeatherInfo(BaseModel):
    temperature: float
    condition: str
    humidity: int
    description: str


async def main() -> None:
    provider = new_provider("openai", ProviderOptions(api_key=os.environ.get("OPENAI_API_KEY"), timeout=30))

    weather = WeatherInfo.model_construct()
    await provider.invoke(
        from_messages(
            from_system("You report the weather as JSON."),
            from_user("Describe a typical summer afternoon in {{city}}."),
        ).invoke({"city": "Lisbon"}),
        InvokeOptions(structured_output=weather),
    )

    print(f"{weather.temperature}°C, {weather.condition}, humidity {weather.humidity}%")
    print(weather.description)


if __name__ == "__main__":
    asyncio.run(main())
