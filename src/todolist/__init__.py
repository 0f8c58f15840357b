"""Local single-user task list: task store, storage backends and a console front end."""

__version__ = "0.1.0"
