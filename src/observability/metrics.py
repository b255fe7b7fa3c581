"""Business metrics for the Taskboard service.

Defines OpenTelemetry metrics for task operations:
- Creation and status changes
- Checklist toggles
- Sharing changes
- Failures and processing time
"""

from opentelemetry import metrics

meter = metrics.get_meter(__name__)

# =============================================================================
# TASK METRICS
# =============================================================================

tasks_created = meter.create_counter(
    name="taskboard.tasks.created",
    description="Total tasks created",
    unit="1",
)

task_status_changes = meter.create_counter(
    name="taskboard.tasks.status_changes",
    description="Total task status changes",
    unit="1",
)

tasks_completed = meter.create_counter(
    name="taskboard.tasks.completed",
    description="Total tasks moved to DONE",
    unit="1",
)

checklist_items_toggled = meter.create_counter(
    name="taskboard.tasks.checklist_toggles",
    description="Total checklist item toggles",
    unit="1",
)

task_sharing_changes = meter.create_counter(
    name="taskboard.tasks.sharing_changes",
    description="Total share and unshare operations",
    unit="1",
)

tasks_failed = meter.create_counter(
    name="taskboard.tasks.failed",
    description="Total task operation failures",
    unit="1",
)

task_processing_time = meter.create_histogram(
    name="taskboard.task.processing_time",
    description="Time to process task operations",
    unit="ms",
)

# =============================================================================
# QUERY METRICS
# =============================================================================

task_queries = meter.create_counter(
    name="taskboard.tasks.queries",
    description="Total task listing queries by filter",
    unit="1",
)

user_reference_resolution_failures = meter.create_counter(
    name="taskboard.users.resolution_failures",
    description="User reference lookups that failed and left references unresolved",
    unit="1",
)
