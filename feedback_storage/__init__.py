"""Storage layer for feedback questions and instructor-course associations."""
