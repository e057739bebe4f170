"""Sample data generators."""

from transfer_scheduler.generators.transfer import TransferRequestGenerator

__all__ = ["TransferRequestGenerator"]
