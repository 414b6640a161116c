"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskCollection, TaskUpdate) and errors
- task_store.py: the task collection service over a key-value store
"""
