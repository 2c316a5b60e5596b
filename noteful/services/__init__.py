"""
Noteful API — Services Layer
=============================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).
How:   One stateless service per resource, each exposed as a module-level singleton.

Service Inventory:
    - FolderService: folders CRUD
    - NoteService:   notes CRUD + title search, joins folder name and tags
    - TagService:    tags CRUD
"""
