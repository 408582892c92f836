"""
Task subsystem.

Components:
- task_models.py: task variants (ToDo, Deadline, Event), rendering, records
- task_list.py: the ordered in-memory store and all list operations
"""
