"""Pub/Sub tools."""

from __future__ import annotations

from gcloud_mcp.execution import Executor
from gcloud_mcp.mcp_runtime import ToolResult, ToolSpec
from gcloud_mcp.tools import _schemas as s
from gcloud_mcp.tools.base import (
    get_optional_bool,
    get_optional_int,
    get_optional_string,
    get_optional_string_map,
    get_required_string,
    guard_arguments,
    run_command,
)

TOPICS_LIST_SCHEMA = s.object_schema({"project": s.PROJECT})
PUBLISH_SCHEMA = s.object_schema(
    {
        "topic": s.string("Topic to publish to"),
        "message": s.string("Message body"),
        "attributes": s.described(s.STRING_MAP, "Message attributes"),
        "project": s.PROJECT,
    },
    required=["topic", "message"],
)
PULL_SCHEMA = s.object_schema(
    {
        "subscription": s.string("Subscription to pull from"),
        "limit": s.limit(10, "Maximum number of messages"),
        "auto_ack": {"type": "boolean", "description": "Acknowledge pulled messages"},
        "project": s.PROJECT,
    },
    required=["subscription"],
)


def build_pubsub_tools(executor: Executor) -> list[ToolSpec]:
    @guard_arguments(TOPICS_LIST_SCHEMA)
    async def topics_list(args: dict[str, object]) -> ToolResult:
        cmd = executor.command("pubsub", "topics", "list").with_project(
            get_optional_string(args, "project")
        )
        return await run_command(cmd.execute())

    @guard_arguments(PUBLISH_SCHEMA)
    async def topics_publish(args: dict[str, object]) -> ToolResult:
        topic = get_required_string(args, "topic")
        cmd = (
            executor.command("pubsub", "topics", "publish", topic)
            .with_flag("message", get_required_string(args, "message"))
            .with_project(get_optional_string(args, "project"))
        )
        for key, value in get_optional_string_map(args, "attributes").items():
            cmd.with_array_flag("attribute", f"{key}={value}")
        return await run_command(cmd.execute())

    @guard_arguments(PULL_SCHEMA)
    async def subscriptions_pull(args: dict[str, object]) -> ToolResult:
        subscription = get_required_string(args, "subscription")
        cmd = (
            executor.command("pubsub", "subscriptions", "pull", subscription)
            .with_flag("limit", str(get_optional_int(args, "limit", 10)))
            .with_project(get_optional_string(args, "project"))
        )
        if get_optional_bool(args, "auto_ack"):
            cmd.with_bool_flag("auto-ack")
        return await run_command(cmd.execute())

    return [
        ToolSpec(
            name="gcp_pubsub_topics_list",
            description="List Pub/Sub topics",
            input_schema=TOPICS_LIST_SCHEMA,
            handler=topics_list,
        ),
        ToolSpec(
            name="gcp_pubsub_topics_publish",
            description="Publish a message to a topic",
            input_schema=PUBLISH_SCHEMA,
            handler=topics_publish,
        ),
        ToolSpec(
            name="gcp_pubsub_subscriptions_pull",
            description="Pull messages from a subscription",
            input_schema=PULL_SCHEMA,
            handler=subscriptions_pull,
        ),
    ]
