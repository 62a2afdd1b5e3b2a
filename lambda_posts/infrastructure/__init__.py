"""Infrastructure layer: data persistence for users and posts.

The repositories in ``database`` are the data-access collaborators the API
handlers call. Each exposes async CRUD operations and reports any storage
failure as ``StoreError``.
"""
