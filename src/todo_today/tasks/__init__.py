"""
Task subsystem.

Components:
- task_models.py: data structures (Todo, ListFilter) and the JSON codec
- task_store.py: TodoStore, the in-memory list mirrored to key-value storage
- task_views.py: derived, filtered and sorted views of the list
- task_api.py: create/edit forms used by the commands
"""
