"""TimeMaster: personal task, time-block and Pomodoro tracking API."""

__version__ = "0.1.0"
