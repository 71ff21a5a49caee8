"""Secret Manager tools."""

from __future__ import annotations

from gcloud_mcp.execution import Executor
from gcloud_mcp.mcp_runtime import ToolResult, ToolSpec
from gcloud_mcp.tools import _schemas as s
from gcloud_mcp.tools.base import (
    ToolHandler,
    get_optional_int,
    get_optional_string,
    get_optional_string_map,
    get_required_string,
    guard_arguments,
    join_pairs,
    run_command,
)

_SECRET_ID = s.string("ID of the secret")

LIST_SCHEMA = s.object_schema(
    {"project": s.PROJECT, "filter": s.FILTER, "limit": s.limit(100)},
)
CREATE_SCHEMA = s.object_schema(
    {
        "secret_id": s.string("ID for the new secret"),
        "project": s.PROJECT,
        "replication_policy": s.string(
            "Replication policy",
            enum=["automatic", "user-managed"],
            default="automatic",
        ),
        "labels": s.described(s.STRING_MAP, "Labels as key-value pairs"),
    },
    required=["secret_id"],
)
DESCRIBE_SCHEMA = s.object_schema(
    {"secret_id": _SECRET_ID, "project": s.PROJECT},
    required=["secret_id"],
)
DELETE_SCHEMA = DESCRIBE_SCHEMA
VERSIONS_ADD_SCHEMA = s.object_schema(
    {
        "secret_id": _SECRET_ID,
        "data": s.string("Secret payload"),
        "project": s.PROJECT,
    },
    required=["secret_id", "data"],
)
VERSIONS_ACCESS_SCHEMA = s.object_schema(
    {
        "secret_id": _SECRET_ID,
        "version": s.string("Version to access", default="latest"),
        "project": s.PROJECT,
    },
    required=["secret_id"],
)
VERSIONS_LIST_SCHEMA = s.object_schema(
    {"secret_id": _SECRET_ID, "project": s.PROJECT, "filter": s.FILTER},
    required=["secret_id"],
)
VERSION_STATE_SCHEMA = s.object_schema(
    {
        "secret_id": _SECRET_ID,
        "version": s.string("Version number"),
        "project": s.PROJECT,
    },
    required=["secret_id", "version"],
)
GET_IAM_POLICY_SCHEMA = DESCRIBE_SCHEMA
ADD_IAM_BINDING_SCHEMA = s.object_schema(
    {
        "secret_id": _SECRET_ID,
        "member": s.string("Member to grant the role to (e.g. user:alice@example.com)"),
        "role": s.string("Role to grant (e.g. roles/secretmanager.secretAccessor)"),
        "project": s.PROJECT,
    },
    required=["secret_id", "member", "role"],
)


def build_secrets_tools(executor: Executor) -> list[ToolSpec]:
    @guard_arguments(LIST_SCHEMA)
    async def secrets_list(args: dict[str, object]) -> ToolResult:
        cmd = (
            executor.command("secrets", "list")
            .with_project(get_optional_string(args, "project"))
            .with_flag("filter", get_optional_string(args, "filter"))
        )
        limit = get_optional_int(args, "limit", 100)
        if limit > 0:
            cmd.with_flag("limit", str(limit))
        return await run_command(cmd.execute())

    @guard_arguments(CREATE_SCHEMA)
    async def secrets_create(args: dict[str, object]) -> ToolResult:
        secret_id = get_required_string(args, "secret_id")
        cmd = (
            executor.command("secrets", "create", secret_id)
            .with_project(get_optional_string(args, "project"))
            .with_flag(
                "replication-policy",
                get_optional_string(args, "replication_policy", "automatic"),
            )
        )
        labels = get_optional_string_map(args, "labels")
        if labels:
            cmd.with_flag("labels", join_pairs(labels))
        return await run_command(cmd.execute())

    @guard_arguments(DESCRIBE_SCHEMA)
    async def secrets_describe(args: dict[str, object]) -> ToolResult:
        cmd = executor.command(
            "secrets", "describe", get_required_string(args, "secret_id")
        ).with_project(get_optional_string(args, "project"))
        return await run_command(cmd.execute())

    @guard_arguments(DELETE_SCHEMA)
    async def secrets_delete(args: dict[str, object]) -> ToolResult:
        secret_id = get_required_string(args, "secret_id")
        cmd = (
            executor.command("secrets", "delete", secret_id)
            .with_project(get_optional_string(args, "project"))
            .with_bool_flag("quiet")
        )
        return await run_command(cmd.execute(), success_text="Secret deleted successfully")

    @guard_arguments(VERSIONS_ADD_SCHEMA)
    async def versions_add(args: dict[str, object]) -> ToolResult:
        secret_id = get_required_string(args, "secret_id")
        data = get_required_string(args, "data")
        cmd = (
            executor.command("secrets", "versions", "add", secret_id)
            .with_flag("data-file", "-")
            .with_input(data)
            .with_project(get_optional_string(args, "project"))
        )
        return await run_command(cmd.execute())

    @guard_arguments(VERSIONS_ACCESS_SCHEMA)
    async def versions_access(args: dict[str, object]) -> ToolResult:
        secret_id = get_required_string(args, "secret_id")
        version = get_optional_string(args, "version") or "latest"
        cmd = (
            executor.command("secrets", "versions", "access", version)
            .with_flag("secret", secret_id)
            .with_project(get_optional_string(args, "project"))
            .with_text_format()
        )
        return await run_command(cmd.execute())

    @guard_arguments(VERSIONS_LIST_SCHEMA)
    async def versions_list(args: dict[str, object]) -> ToolResult:
        cmd = (
            executor.command("secrets", "versions", "list", get_required_string(args, "secret_id"))
            .with_project(get_optional_string(args, "project"))
            .with_flag("filter", get_optional_string(args, "filter"))
        )
        return await run_command(cmd.execute())

    def version_action(
        action: str, *, quiet: bool = False, success: str | None = None
    ) -> ToolHandler:
        async def handler(args: dict[str, object]) -> ToolResult:
            secret_id = get_required_string(args, "secret_id")
            version = get_required_string(args, "version")
            cmd = (
                executor.command("secrets", "versions", action, version)
                .with_flag("secret", secret_id)
                .with_project(get_optional_string(args, "project"))
            )
            if quiet:
                cmd.with_bool_flag("quiet")
            return await run_command(cmd.execute(), success_text=success)

        handler.__name__ = f"versions_{action}"
        return guard_arguments(VERSION_STATE_SCHEMA)(handler)

    @guard_arguments(GET_IAM_POLICY_SCHEMA)
    async def get_iam_policy(args: dict[str, object]) -> ToolResult:
        cmd = executor.command(
            "secrets", "get-iam-policy", get_required_string(args, "secret_id")
        ).with_project(get_optional_string(args, "project"))
        return await run_command(cmd.execute())

    @guard_arguments(ADD_IAM_BINDING_SCHEMA)
    async def add_iam_policy_binding(args: dict[str, object]) -> ToolResult:
        secret_id = get_required_string(args, "secret_id")
        cmd = (
            executor.command("secrets", "add-iam-policy-binding", secret_id)
            .with_flag("member", get_required_string(args, "member"))
            .with_flag("role", get_required_string(args, "role"))
            .with_project(get_optional_string(args, "project"))
        )
        return await run_command(cmd.execute())

    return [
        ToolSpec(
            name="gcp_secrets_list",
            description="List secrets in a project",
            input_schema=LIST_SCHEMA,
            handler=secrets_list,
        ),
        ToolSpec(
            name="gcp_secrets_create",
            description="Create a new secret",
            input_schema=CREATE_SCHEMA,
            handler=secrets_create,
        ),
        ToolSpec(
            name="gcp_secrets_describe",
            description="Get details of a secret",
            input_schema=DESCRIBE_SCHEMA,
            handler=secrets_describe,
        ),
        ToolSpec(
            name="gcp_secrets_delete",
            description="Delete a secret",
            input_schema=DELETE_SCHEMA,
            handler=secrets_delete,
        ),
        ToolSpec(
            name="gcp_secrets_versions_add",
            description="Add a new version to a secret",
            input_schema=VERSIONS_ADD_SCHEMA,
            handler=versions_add,
        ),
        ToolSpec(
            name="gcp_secrets_versions_access",
            description="Access the payload of a secret version",
            input_schema=VERSIONS_ACCESS_SCHEMA,
            handler=versions_access,
        ),
        ToolSpec(
            name="gcp_secrets_versions_list",
            description="List versions of a secret",
            input_schema=VERSIONS_LIST_SCHEMA,
            handler=versions_list,
        ),
        ToolSpec(
            name="gcp_secrets_versions_disable",
            description="Disable a secret version",
            input_schema=VERSION_STATE_SCHEMA,
            handler=version_action("disable"),
        ),
        ToolSpec(
            name="gcp_secrets_versions_enable",
            description="Enable a disabled secret version",
            input_schema=VERSION_STATE_SCHEMA,
            handler=version_action("enable"),
        ),
        ToolSpec(
            name="gcp_secrets_versions_destroy",
            description="Destroy a secret version (irreversible)",
            input_schema=VERSION_STATE_SCHEMA,
            handler=version_action(
                "destroy", quiet=True, success="Secret version destroyed successfully"
            ),
        ),
        ToolSpec(
            name="gcp_secrets_get_iam_policy",
            description="Get the IAM policy of a secret",
            input_schema=GET_IAM_POLICY_SCHEMA,
            handler=get_iam_policy,
        ),
        ToolSpec(
            name="gcp_secrets_add_iam_policy_binding",
            description="Grant a role on a secret to a member",
            input_schema=ADD_IAM_BINDING_SCHEMA,
            handler=add_iam_policy_binding,
        ),
    ]
