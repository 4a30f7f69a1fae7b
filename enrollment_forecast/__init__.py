"""
Course Enrollment Demand Forecasting

Predicts per-student enrollment probabilities for next-term candidate
courses and aggregates them into expected demand per course.
"""

__version__ = "1.0.0"
