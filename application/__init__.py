"""
Application Layer for the adaptive scheduling engine.

Part of AMA-612: Adaptive scheduling domain model

This package contains:
- ports/: Abstract repository interfaces (what the domain needs)
- use_cases/: Program activation and regeneration workflows
- exceptions.py: Error taxonomy shared by services and routers
"""
