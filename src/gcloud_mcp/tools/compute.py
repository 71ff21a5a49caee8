"""Compute Engine instance tools. Instance operations are zonal."""

from __future__ import annotations

from gcloud_mcp.execution import Executor
from gcloud_mcp.mcp_runtime import ToolResult, ToolSpec
from gcloud_mcp.tools import _schemas as s
from gcloud_mcp.tools.base import (
    ToolHandler,
    get_optional_bool,
    get_optional_string,
    get_optional_string_list,
    get_optional_string_map,
    get_required_string,
    guard_arguments,
    join_pairs,
    run_command,
)

_INSTANCE = s.string("Name of the instance")

LIST_SCHEMA = s.object_schema(
    {
        "project": s.PROJECT,
        "zone": s.string("Only list instances in this zone"),
        "filter": s.FILTER,
    },
)
INSTANCE_SCHEMA = s.object_schema(
    {"instance": _INSTANCE, "zone": s.ZONE, "project": s.PROJECT},
    required=["instance"],
)
CREATE_SCHEMA = s.object_schema(
    {
        "instance": s.string("Name of the new instance"),
        "zone": s.ZONE,
        "project": s.PROJECT,
        "machine_type": s.string("Machine type", default="e2-micro"),
        "image_family": s.string("Image family", default="debian-12"),
        "image_project": s.string("Project hosting the image", default="debian-cloud"),
        "boot_disk_size": s.string("Boot disk size (e.g. 10GB)"),
        "boot_disk_type": s.string("Boot disk type (e.g. pd-standard, pd-ssd)"),
        "network": s.string("Network name"),
        "subnet": s.string("Subnet name"),
        "service_account": s.string("Service account email"),
        "scopes": s.described(s.STRING_LIST, "Access scopes"),
        "tags": s.described(s.STRING_LIST, "Network tags"),
        "labels": s.described(s.STRING_MAP, "Labels as key-value pairs"),
        "metadata": s.described(s.STRING_MAP, "Metadata as key-value pairs"),
        "preemptible": {"type": "boolean", "description": "Create a preemptible VM"},
    },
    required=["instance"],
)


def build_compute_tools(executor: Executor) -> list[ToolSpec]:
    @guard_arguments(LIST_SCHEMA)
    async def instances_list(args: dict[str, object]) -> ToolResult:
        cmd = (
            executor.command("compute", "instances", "list")
            .with_project(get_optional_string(args, "project"))
            .with_flag("zones", get_optional_string(args, "zone"))
            .with_flag("filter", get_optional_string(args, "filter"))
        )
        return await run_command(cmd.execute())

    @guard_arguments(CREATE_SCHEMA)
    async def instances_create(args: dict[str, object]) -> ToolResult:
        instance = get_required_string(args, "instance")
        cmd = (
            executor.command("compute", "instances", "create", instance)
            .with_zone(get_optional_string(args, "zone"))
            .with_project(get_optional_string(args, "project"))
            .with_flag("machine-type", get_optional_string(args, "machine_type", "e2-micro"))
            .with_flag("image-family", get_optional_string(args, "image_family", "debian-12"))
            .with_flag("image-project", get_optional_string(args, "image_project", "debian-cloud"))
            .with_flag("boot-disk-size", get_optional_string(args, "boot_disk_size"))
            .with_flag("boot-disk-type", get_optional_string(args, "boot_disk_type"))
            .with_flag("network", get_optional_string(args, "network"))
            .with_flag("subnet", get_optional_string(args, "subnet"))
            .with_flag("service-account", get_optional_string(args, "service_account"))
            .with_flag("scopes", ",".join(get_optional_string_list(args, "scopes")))
            .with_flag("tags", ",".join(get_optional_string_list(args, "tags")))
            .with_flag("labels", join_pairs(get_optional_string_map(args, "labels")))
            .with_flag("metadata", join_pairs(get_optional_string_map(args, "metadata")))
        )
        if get_optional_bool(args, "preemptible"):
            cmd.with_bool_flag("preemptible")
        return await run_command(cmd.execute_zonal())

    def instance_action(
        action: str, *, quiet: bool = False, success: str | None = None
    ) -> ToolHandler:
        async def handler(args: dict[str, object]) -> ToolResult:
            instance = get_required_string(args, "instance")
            cmd = (
                executor.command("compute", "instances", action, instance)
                .with_zone(get_optional_string(args, "zone"))
                .with_project(get_optional_string(args, "project"))
            )
            if quiet:
                cmd.with_bool_flag("quiet")
            success_text = success.format(instance=instance) if success else None
            return await run_command(cmd.execute_zonal(), success_text=success_text)

        handler.__name__ = f"instances_{action}"
        return guard_arguments(INSTANCE_SCHEMA)(handler)

    return [
        ToolSpec(
            name="gcp_compute_instances_list",
            description="List Compute Engine VM instances",
            input_schema=LIST_SCHEMA,
            handler=instances_list,
        ),
        ToolSpec(
            name="gcp_compute_instances_describe",
            description="Get details of a VM instance",
            input_schema=INSTANCE_SCHEMA,
            handler=instance_action("describe"),
        ),
        ToolSpec(
            name="gcp_compute_instances_create",
            description="Create a new VM instance",
            input_schema=CREATE_SCHEMA,
            handler=instances_create,
        ),
        ToolSpec(
            name="gcp_compute_instances_start",
            description="Start a stopped VM instance",
            input_schema=INSTANCE_SCHEMA,
            handler=instance_action("start"),
        ),
        ToolSpec(
            name="gcp_compute_instances_stop",
            description="Stop a running VM instance",
            input_schema=INSTANCE_SCHEMA,
            handler=instance_action("stop"),
        ),
        ToolSpec(
            name="gcp_compute_instances_delete",
            description="Delete a VM instance",
            input_schema=INSTANCE_SCHEMA,
            handler=instance_action(
                "delete", quiet=True, success="Instance {instance} deleted successfully"
            ),
        ),
    ]
