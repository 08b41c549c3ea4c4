from eventgen.policy.passive import REJECT, Accept, Decision, PassiveAIGenPolicy, Reject, density_threshold

__all__ = ["Accept", "Decision", "PassiveAIGenPolicy", "REJECT", "Reject", "density_threshold"]
