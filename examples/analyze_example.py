"""Example: Review a directory tree directly against the provider."""

import asyncio
import os

from arch_snapshot import SnapshotConfig, analyze_architecture

TREE = """\
src/
  api/
    routes.py
    schemas.py
  services/
    billing.py
  db/
    models.py
tests/
"""


async def main():
    """Analyze a small project tree and print the verdict."""
    config = SnapshotConfig(api_key=os.environ.get("OPENAI_API_KEY"))

    print("Requesting architecture snapshot...")
    result = await analyze_architecture(TREE, config)

    print(f"\nSummary: {result.summary}")
    print(f"Patterns: {', '.join(result.patterns) or 'none detected'}")
    for strength in result.strengths:
        print(f"  + {strength}")
    print(f"Risk: {result.risk}")
    print(f"Improvement: {result.improvement}")


if __name__ == "__main__":
    asyncio.run(main())
