"""proofstore — file-backed record storage for proof workspaces.

Persists keyed records as one JSON file each inside a workspace
subdirectory, and scaffolds the workspace directory layout.
"""

__version__ = "0.1.0"
