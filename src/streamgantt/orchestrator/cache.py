from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Iterable


def sha256_bytes(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def file_digest(path: Path) -> str:
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(1024 * 1024), b""):
            h.update(chunk)
    return h.hexdigest()


def compute_step_hash(name: str, input_paths: Iterable[Path], config: dict) -> str:
    """Hash of step name, input contents and config; mtimes are ignored."""
    payload: dict = {"name": name, "inputs": [], "config": config}
    for p in sorted({str(p) for p in input_paths}):
        pp = Path(p)
        digest = file_digest(pp) if pp.is_file() else None
        payload["inputs"].append({"path": p, "digest": digest})
    data = json.dumps(payload, sort_keys=True, default=str).encode("utf-8")
    return sha256_bytes(data)


def _hash_file_for_output(out_path: Path) -> Path:
    return out_path.with_suffix(out_path.suffix + ".hash")


def is_cached(step_hash: str, output_paths: Iterable[Path]) -> bool:
    outputs = list(output_paths)
    if not outputs:
        return False
    # All outputs must exist and match hash
    for p in outputs:
        hf = _hash_file_for_output(p)
        if not p.exists() or not hf.exists():
            return False
        if hf.read_text(encoding="utf-8").strip() != step_hash:
            return False
    return True


def write_hash_files(step_hash: str, output_paths: Iterable[Path]) -> None:
    for p in output_paths:
        hf = _hash_file_for_output(p)
        hf.parent.mkdir(parents=True, exist_ok=True)
        hf.write_text(step_hash, encoding="utf-8")
