from myumkm.middleware.access_guard import (
    AccessGuard,
    AccessGuardMiddleware,
    GuardDecision,
    GuardOutcome,
)

__all__ = ["AccessGuard", "AccessGuardMiddleware", "GuardDecision", "GuardOutcome"]
