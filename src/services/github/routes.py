"""GitHub webhook routes."""

from fastapi import APIRouter, BackgroundTasks, Request

from src.core.logging import get_logger
from src.core.security import require_github_signature
from src.schemas.review import ReviewTask
from src.services.github.schemas import PingResponse, ReviewStartedResponse, WebhookResponse
from src.services.github.service import parse_pull_request_event
from src.services.reviewer.service import run_review

logger = get_logger("github.routes")

router = APIRouter()


@router.post("/webhook/github")
async def github_webhook(request: Request, background_tasks: BackgroundTasks):
    """Handle GitHub webhook events."""
    event = request.headers.get("X-GitHub-Event")
    signature = request.headers.get("X-Hub-Signature-256", "")
    delivery_id = request.headers.get("X-GitHub-Delivery")

    logger.info(f"Webhook received: event={event}, delivery={delivery_id}")

    body = await request.body()
    require_github_signature(body, signature)

    payload = await request.json()

    if event == "ping":
        return PingResponse(zen=payload.get("zen", ""))

    if event != "pull_request":
        logger.info(f"Unhandled event type: {event}")
        return WebhookResponse(message=f"Event {event} not handled")

    task = parse_pull_request_event(payload)
    if task is None:
        return WebhookResponse(
            message=f"Action {payload.get('action')} not reviewed",
            action=payload.get("action"),
        )

    background_tasks.add_task(run_review, task)

    return ReviewStartedResponse(
        pr=f"{task.owner}/{task.repo}#{task.pr_number}",
        head_sha=task.head_sha,
    )


@router.post("/review", response_model=ReviewStartedResponse)
async def trigger_review(task: ReviewTask, background_tasks: BackgroundTasks):
    """Queue a review for a PR head commit, bypassing the webhook."""
    background_tasks.add_task(run_review, task)
    return ReviewStartedResponse(
        pr=f"{task.owner}/{task.repo}#{task.pr_number}",
        head_sha=task.head_sha,
    )
