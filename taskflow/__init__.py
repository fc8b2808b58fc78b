"""
taskflow - Task dependency graph and workflow state machine

Tracks work items that move through a configurable lifecycle and may depend
on one another across departments:

- Dependency graph: BLOCKS / RELATES_TO edges, kept acyclic on BLOCKS
- Status state machine: blocking reasons, mandatory checklist gating
- Enforcement policies: warn vs block, per department or global
- Audit trail: append-only status and checklist history
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
