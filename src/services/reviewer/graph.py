"""LangGraph pipeline that reviews one file's diff."""

import json
import re

from langchain_core.messages import AIMessage, HumanMessage, SystemMessage
from langgraph.graph import END, StateGraph

from src.config import settings
from src.core.exceptions import ReviewerCallError
from src.core.llm import get_chat_llm
from src.core.logging import get_logger
from src.core.prompts import render_code_review_prompt, render_review_system_prompt
from src.services.reviewer.state import FileReviewState

logger = get_logger("reviewer.graph")

JSON_ARRAY_RE = re.compile(r"\[[\s\S]*\]")


def message_text(message: AIMessage) -> str:
    """Flatten an AI message's content into plain text."""
    content = message.content
    if isinstance(content, str):
        return content
    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


def extract_findings(text: str) -> list[dict]:
    """Pull the JSON array of findings out of the model's reply.

    The reply may wrap the array in prose or a code fence. Anything that is
    not a JSON array of objects yields no findings.
    """
    match = JSON_ARRAY_RE.search(text or "")
    if not match:
        return []
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        logger.warning(f"Failed to parse review JSON: {e}")
        return []
    if not isinstance(parsed, list):
        return []
    return [entry for entry in parsed if isinstance(entry, dict)]


def create_file_review_graph():
    """Create the per-file review graph: prompt -> model -> findings."""

    def build_prompt(state: FileReviewState) -> dict:
        return {
            "messages": [
                SystemMessage(content=render_review_system_prompt()),
                HumanMessage(content=render_code_review_prompt(state["path"], state["diff"])),
            ]
        }

    async def call_model(state: FileReviewState) -> dict:
        path = state["path"]
        try:
            llm = get_chat_llm(model=settings.review_model, max_tokens=settings.review_max_tokens)
            response = await llm.ainvoke(state["messages"])
        except Exception as e:
            logger.error(f"Reviewer call failed for {path}: {e}")
            raise ReviewerCallError(path, str(e)) from e

        usage = getattr(response, "usage_metadata", None)
        if usage:
            logger.info(
                f"[tokens] {path}: input={usage.get('input_tokens')}, "
                f"output={usage.get('output_tokens')}"
            )
        return {"messages": [response]}

    def parse_findings(state: FileReviewState) -> dict:
        last_message = state["messages"][-1]
        text = message_text(last_message) if isinstance(last_message, AIMessage) else ""
        findings = extract_findings(text)
        logger.info(f"Reviewer returned {len(findings)} entries for {state['path']}")
        return {"findings": findings}

    graph = StateGraph(FileReviewState)

    graph.add_node("build_prompt", build_prompt)
    graph.add_node("call_model", call_model)
    graph.add_node("parse_findings", parse_findings)

    graph.set_entry_point("build_prompt")
    graph.add_edge("build_prompt", "call_model")
    graph.add_edge("call_model", "parse_findings")
    graph.add_edge("parse_findings", END)

    return graph.compile()


async def review_file(path: str, diff_text: str) -> list[dict]:
    """Review one file's diff and return the model's raw ``{line, body}`` entries.

    Raises:
        ReviewerCallError: If the model call fails
    """
    graph = create_file_review_graph()
    result = await graph.ainvoke(
        {"path": path, "diff": diff_text, "messages": [], "findings": []}
    )
    return result.get("findings", [])
