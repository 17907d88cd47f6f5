"""Core logic layer.

Subpackages:
- planning: plan instruction, schema and parsing
- analysis: food photo calorie estimation
- images: meal illustration cache
- workflow: input/generating/result state
- reporting: poster figures (BMI, calorie split)
"""
__all__ = ["planning", "analysis", "images", "workflow", "reporting"]
