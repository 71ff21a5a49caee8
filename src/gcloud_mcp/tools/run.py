"""Cloud Run tools. All Cloud Run resources are regional."""

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
    join_pairs,
    run_command,
)

SERVICES_LIST_SCHEMA = s.object_schema(
    {"project": s.PROJECT, "region": s.REGION, "limit": s.limit(100)},
)
SERVICES_DESCRIBE_SCHEMA = s.object_schema(
    {
        "service": s.string("Name of the service to describe"),
        "project": s.PROJECT,
        "region": s.REGION,
    },
    required=["service"],
)
SERVICES_DEPLOY_SCHEMA = s.object_schema(
    {
        "service": s.string("Name of the service to deploy"),
        "image": s.string("Container image URL (e.g. gcr.io/project/image:tag)"),
        "project": s.PROJECT,
        "region": s.REGION,
        "port": s.string("Container port"),
        "memory": s.string("Memory limit (e.g. 512Mi, 1Gi)"),
        "cpu": s.string("CPU limit (e.g. 1, 2)"),
        "min_instances": {"type": "integer", "minimum": 0, "description": "Minimum instances"},
        "max_instances": {"type": "integer", "minimum": 0, "description": "Maximum instances"},
        "service_account": s.string("Service account email"),
        "env_vars": s.described(s.STRING_MAP, "Environment variables"),
        "allow_unauthenticated": {
            "type": "boolean",
            "description": "Allow unauthenticated invocations",
            "default": False,
        },
    },
    required=["service", "image"],
)
SERVICES_DELETE_SCHEMA = s.object_schema(
    {
        "service": s.string("Name of the service to delete"),
        "project": s.PROJECT,
        "region": s.REGION,
    },
    required=["service"],
)
SERVICES_UPDATE_TRAFFIC_SCHEMA = s.object_schema(
    {
        "service": s.string("Name of the service"),
        "project": s.PROJECT,
        "region": s.REGION,
        "to_latest": {"type": "boolean", "description": "Send all traffic to the latest revision"},
        "to_revisions": s.string("Traffic split, e.g. 'rev-1=50,rev-2=50'"),
    },
    required=["service"],
)
REVISIONS_LIST_SCHEMA = s.object_schema(
    {
        "service": s.string("Service whose revisions to list"),
        "project": s.PROJECT,
        "region": s.REGION,
    },
    required=["service"],
)


def build_run_tools(executor: Executor) -> list[ToolSpec]:
    @guard_arguments(SERVICES_LIST_SCHEMA)
    async def services_list(args: dict[str, object]) -> ToolResult:
        cmd = (
            executor.command("run", "services", "list")
            .with_project(get_optional_string(args, "project"))
            .with_region(get_optional_string(args, "region"))
            .with_flag("limit", str(get_optional_int(args, "limit", 100)))
        )
        return await run_command(cmd.execute_regional())

    @guard_arguments(SERVICES_DESCRIBE_SCHEMA)
    async def services_describe(args: dict[str, object]) -> ToolResult:
        service = get_required_string(args, "service")
        cmd = (
            executor.command("run", "services", "describe", service)
            .with_project(get_optional_string(args, "project"))
            .with_region(get_optional_string(args, "region"))
        )
        return await run_command(cmd.execute_regional())

    @guard_arguments(SERVICES_DEPLOY_SCHEMA)
    async def services_deploy(args: dict[str, object]) -> ToolResult:
        service = get_required_string(args, "service")
        image = get_required_string(args, "image")
        cmd = (
            executor.command("run", "deploy", service)
            .with_flag("image", image)
            .with_project(get_optional_string(args, "project"))
            .with_region(get_optional_string(args, "region"))
            .with_flag("port", get_optional_string(args, "port"))
            .with_flag("memory", get_optional_string(args, "memory"))
            .with_flag("cpu", get_optional_string(args, "cpu"))
            .with_flag("service-account", get_optional_string(args, "service_account"))
        )
        for key, flag in (("min_instances", "min-instances"), ("max_instances", "max-instances")):
            count = get_optional_int(args, key, -1)
            if count >= 0:
                cmd.with_flag(flag, str(count))
        env_vars = get_optional_string_map(args, "env_vars")
        if env_vars:
            cmd.with_flag("set-env-vars", join_pairs(env_vars))
        if get_optional_bool(args, "allow_unauthenticated"):
            cmd.with_bool_flag("allow-unauthenticated")
        return await run_command(cmd.execute_regional())

    @guard_arguments(SERVICES_DELETE_SCHEMA)
    async def services_delete(args: dict[str, object]) -> ToolResult:
        service = get_required_string(args, "service")
        cmd = (
            executor.command("run", "services", "delete", service)
            .with_project(get_optional_string(args, "project"))
            .with_region(get_optional_string(args, "region"))
            .with_bool_flag("quiet")
        )
        return await run_command(
            cmd.execute_regional(), success_text=f"Service {service} deleted successfully"
        )

    @guard_arguments(SERVICES_UPDATE_TRAFFIC_SCHEMA)
    async def services_update_traffic(args: dict[str, object]) -> ToolResult:
        service = get_required_string(args, "service")
        cmd = (
            executor.command("run", "services", "update-traffic", service)
            .with_project(get_optional_string(args, "project"))
            .with_region(get_optional_string(args, "region"))
        )
        if get_optional_bool(args, "to_latest"):
            cmd.with_bool_flag("to-latest")
        else:
            to_revisions = get_optional_string(args, "to_revisions")
            if not to_revisions:
                raise ValueError("either to_latest or to_revisions is required")
            cmd.with_flag("to-revisions", to_revisions)
        return await run_command(cmd.execute_regional())

    @guard_arguments(REVISIONS_LIST_SCHEMA)
    async def revisions_list(args: dict[str, object]) -> ToolResult:
        cmd = (
            executor.command("run", "revisions", "list")
            .with_flag("service", get_required_string(args, "service"))
            .with_project(get_optional_string(args, "project"))
            .with_region(get_optional_string(args, "region"))
        )
        return await run_command(cmd.execute_regional())

    return [
        ToolSpec(
            name="gcp_run_services_list",
            description="List Cloud Run services in a project",
            input_schema=SERVICES_LIST_SCHEMA,
            handler=services_list,
        ),
        ToolSpec(
            name="gcp_run_services_describe",
            description="Get detailed information about a Cloud Run service",
            input_schema=SERVICES_DESCRIBE_SCHEMA,
            handler=services_describe,
        ),
        ToolSpec(
            name="gcp_run_services_deploy",
            description="Deploy a container image to Cloud Run",
            input_schema=SERVICES_DEPLOY_SCHEMA,
            handler=services_deploy,
        ),
        ToolSpec(
            name="gcp_run_services_delete",
            description="Delete a Cloud Run service",
            input_schema=SERVICES_DELETE_SCHEMA,
            handler=services_delete,
        ),
        ToolSpec(
            name="gcp_run_services_update_traffic",
            description="Update traffic allocation for a Cloud Run service",
            input_schema=SERVICES_UPDATE_TRAFFIC_SCHEMA,
            handler=services_update_traffic,
        ),
        ToolSpec(
            name="gcp_run_revisions_list",
            description="List revisions of a Cloud Run service",
            input_schema=REVISIONS_LIST_SCHEMA,
            handler=revisions_list,
        ),
    ]
