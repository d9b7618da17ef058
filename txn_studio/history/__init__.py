from .path_rows import PathRow, reconstruct_history, reconstruct_paths, severity_for_status

__all__ = ["PathRow", "reconstruct_history", "reconstruct_paths", "severity_for_status"]
