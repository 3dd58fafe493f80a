"""
Atomic file writer - dashboard JSON is never left half-written.
Implements temp-write → fsync → rename pattern for durability.
"""

import os
import json
import tempfile
from pathlib import Path
from typing import Dict, Any


class AtomicWriteError(Exception):
    """Raised when atomic write operations fail."""
    pass


def write_text_atomic(content: str, output_path: Path) -> int:
    """
    Write text content atomically to prevent partial files.
    
    Args:
        content: Text to write
        output_path: Final path for the file
        
    Returns:
        Number of characters written
        
    Raises:
        AtomicWriteError: If the file cannot be written
    """
    output_path = Path(output_path)
    temp_path = None
    
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        
        # Temp file in the same directory so the rename stays on one filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            suffix='.tmp',
            prefix=f'{output_path.stem}_',
            dir=output_path.parent
        )
        temp_path = Path(temp_path_str)
        
        with os.fdopen(temp_fd, 'w', encoding='utf-8') as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        
        os.replace(temp_path, output_path)
        
    except OSError as e:
        if temp_path is not None and temp_path.exists():
            temp_path.unlink()
        raise AtomicWriteError(f"Failed to write {output_path}: {e}") from e
    
    return len(content)


def write_dashboard_json(dashboard: Dict[str, Any], output_path: Path) -> int:
    """
    Serialize and atomically write a DashboardJSON payload.
    
    Args:
        dashboard: Payload from compose_dashboard_metrics
        output_path: Path for the JSON file
        
    Returns:
        Number of characters written
        
    Raises:
        AtomicWriteError: If serialization or the write fails
    """
    try:
        # Serialize first so a bad payload never touches the target file
        json_content = json.dumps(dashboard, indent=2, default=str)
    except (TypeError, ValueError) as e:
        raise AtomicWriteError(f"JSON serialization failed: {e}") from e
    
    return write_text_atomic(json_content, output_path)
