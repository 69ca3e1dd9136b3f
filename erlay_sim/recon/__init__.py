"""Set reconciliation engine."""

from erlay_sim.recon.recset import RecSet, ReconciliationResult, reconcile

__all__ = ["RecSet", "ReconciliationResult", "reconcile"]
