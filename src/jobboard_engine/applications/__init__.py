"""Application eligibility checks."""

from .gate import ApplicationDecision, ApplicationGate, can_apply

__all__ = ["ApplicationDecision", "ApplicationGate", "can_apply"]
