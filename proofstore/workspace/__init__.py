from proofstore.workspace.initializer import init_workspace, is_initialized

__all__ = [
    "init_workspace",
    "is_initialized",
]
