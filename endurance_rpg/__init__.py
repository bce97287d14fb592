"""EnduranceRPG - turns logged workouts into character progression"""

__version__ = "0.2.0"
