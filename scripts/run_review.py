#!/usr/bin/env python3
"""Run a PR review locally: run_review.py <owner> <repo> <pr_number> <head_sha>"""
import asyncio
import sys
from dotenv import load_dotenv

load_dotenv()

from src.config import settings
from src.schemas.review import ReviewTask
from src.services.dedupe.client import close_db, connect_db
from src.services.reviewer.service import review_pull_request

async def main(owner: str, repo: str, pr_number: str, head_sha: str):
    task = ReviewTask(owner=owner, repo=repo, pr_number=int(pr_number), head_sha=head_sha)
    if settings.dedupe_backend == "mongodb":
        await connect_db()
    try:
        result = await review_pull_request(task)
    finally:
        await close_db()
    print(f"Review result: {result.status.value}, {len(result.comments)} comments")

if __name__ == "__main__":
    if len(sys.argv) != 5:
        sys.exit(__doc__)
    asyncio.run(main(*sys.argv[1:]))
