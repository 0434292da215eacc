"""Run sample queries through the configured LLM and show the parsed filters."""

import argparse
import asyncio

from findabuilder.config import SearchConfig
from findabuilder.llm.provider import create_llm
from findabuilder.search.interpreter import QueryInterpreter

SAMPLE_QUERIES = [
    "find thescoho",
    "who is sailesh",
    "find the best builders with score > 50",
    "show me all builders",
    "show wallet 0x09928cebb4c977c5e5db237a2a2ce5cd10497cb8",
    "passport 1234",
    "@vitalik.eth",
    "builders greater than 80 named jesse",
]


async def main() -> None:
    """Interpret each query and print the filter or the degrade reason."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("queries", nargs="*", help="Queries to try (defaults to built-in samples)")
    args = parser.parse_args()

    config = SearchConfig.from_env()
    llm = create_llm(config)
    interpreter = QueryInterpreter(llm)
    print(f"Provider: {config.llm_provider}  Model: {config.llm_model}")

    try:
        for query in args.queries or SAMPLE_QUERIES:
            result = await interpreter.interpret(query)
            print(f"\n{query!r}")
            if result.is_degraded:
                print(f"  DEGRADED: {result.reason}")
            else:
                print(f"  {result.filter.model_dump()}")
    finally:
        if llm is not None:
            await llm.close()


if __name__ == "__main__":
    asyncio.run(main())
