"""
Pure domain services: calorie estimation, calendar arithmetic, set-list
editing and plan materialization planning.
"""
