"""
Feature modules.

Each feature is self-contained with its models, services and schemas.

Structure:
    features/
    ├── sensors/      # Partial sample aggregation
    ├── energy/       # Calorie estimation
    ├── supplement/   # Gel policy, intake lifecycle, hold gesture
    └── session/      # Clock and controller (main entry point)
"""
