"""Core business logic layer.

Subpackages:
- catalog: dietary category resolution and template filtering
- scheduling: weekly schedule generation
- reporting: portion scaling, weekly view and nutrition totals
- shopping: ingredient aggregation and cost estimation
- planning: service tying the logic to the repositories
"""
__all__ = ["catalog", "scheduling", "reporting", "shopping", "planning"]
