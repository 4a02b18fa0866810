from .todo import Task, Label, TaskLabel
