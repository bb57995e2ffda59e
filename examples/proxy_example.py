"""Example: Submit a description to a running analysis proxy."""

import asyncio

from arch_snapshot import SnapshotError, describe_failure, submit_analysis


async def main():
    """Send one description through the proxy and show the result or a fallback message."""
    text = "A monolithic Django app with a Celery worker and a single Postgres database."

    try:
        result = await submit_analysis(text, "http://127.0.0.1:8090/api/architecture")
    except SnapshotError as e:
        print(describe_failure(e))
        return

    print(result.model_dump_json(indent=2))


if __name__ == "__main__":
    asyncio.run(main())
