"""todo-today: a small personal to-do list for the console."""

__version__ = "0.1.0"
