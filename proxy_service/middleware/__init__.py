"""
Middleware for the proxy gateway
"""

from .access_gate import AccessGate, AccessGateMiddleware, GateAction, GateDecision

__all__ = ["AccessGate", "AccessGateMiddleware", "GateAction", "GateDecision"]
