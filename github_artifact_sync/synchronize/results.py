"""Contains results of application execution."""

from github_artifact_sync.synchronize.models import PublishOutcome, SyncResult


class SyncWorkflowResult:
    """Contains results of the sync workflow."""

    def __init__(self, sync_result: SyncResult, publish_outcome: PublishOutcome) -> None:
        """Initialize the result with the pushed commit and the reconciliation outcome."""
        self.sync_result = sync_result
        self.publish_outcome = publish_outcome
