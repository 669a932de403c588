"""Core — orchestration, source selection and credential heuristics.

Import submodules directly (``pinbump.core.orchestrator``,
``pinbump.core.sources``, ``pinbump.core.credentials``); the gate chain
depends on ``sources`` and the orchestrator depends on the gate chain.
"""
