from eventgen.orchestration.orchestrator import AIEventGenOrchestrator

__all__ = ["AIEventGenOrchestrator"]
