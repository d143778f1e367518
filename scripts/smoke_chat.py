import argparse
import asyncio
import json
import os
import pathlib
import sys

from dotenv import find_dotenv, load_dotenv

ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))


def load_env() -> None:
    env_path = find_dotenv()
    if not env_path:
        raise FileNotFoundError(".env not found. Create one at the project root.")
    print(f".env found at: {env_path}")
    load_dotenv(dotenv_path=env_path)


async def run(prompt: str, language: str, identity: str, repeat: int) -> None:
    from src.app.domain.models import Authenticated
    from src.app.infra.counters.redis_store import RedisCounterStore, create_redis_client
    from src.app.presentation.answers import parse_answer
    from src.app.services.completion_proxy import CompletionProxy
    from src.app.services.rate_limiter import FixedWindowRateLimiter
    from src.services.openai_client import OpenAIChatClient

    store = RedisCounterStore(create_redis_client(os.environ["REDIS_URL"], os.getenv("REDIS_TOKEN")))
    client = OpenAIChatClient(api_key=os.environ["OPENAI_API_KEY"])
    proxy = CompletionProxy(
        client,
        FixedWindowRateLimiter(store, prefix="ratelimit-smoke"),
        model=os.getenv("OPENAI_MODEL", "gpt-3.5-turbo-0613"),
    )
    session = Authenticated(user_id=identity, email=identity)

    try:
        for attempt in range(1, repeat + 1):
            result = await proxy.handle(session, prompt, language)
            print(f"\n=== attempt {attempt}: HTTP {result.status_code}")
            print("headers:", result.headers)
            if result.status_code != 200:
                print(json.dumps(result.body, indent=2, ensure_ascii=False))
                continue
            answer = parse_answer(result.body["json"])
            if answer.is_recipe:
                print("title:", answer.recipe.title)
                print("ingredients:", len(answer.recipe.ingredients))
            else:
                print("text:", answer.text[:300])
    finally:
        await client.aclose()
        await store.close()


def main() -> None:
    parser = argparse.ArgumentParser(description="Chat proxy smoke test against real services")
    parser.add_argument("prompt", nargs="?", default="A quick vegetarian lasagna")
    parser.add_argument("--language", default="English")
    parser.add_argument("--identity", default="smoke@example.com")
    parser.add_argument("--repeat", type=int, default=1, help="Send the prompt N times to watch the quota drain")
    args = parser.parse_args()

    load_env()
    asyncio.run(run(args.prompt, args.language, args.identity, args.repeat))


if __name__ == "__main__":
    main()
