"""
Key-value storage used to remember a search between page loads.
MemoryStore is for tests; JsonFileStore keeps values in a small JSON file on disk.
"""

# Standard libs for JSON files and paths
import json  # serialize the key-value map
from pathlib import Path  # filesystem-safe paths
from typing import Dict, Optional, Protocol  # type hints

# Console logging
from loguru import logger  # console logger


class KeyValueStore(Protocol):
	"""Minimal storage capability: string keys to string values."""

	def get(self, key: str) -> Optional[str]: ...

	def set(self, key: str, value: str) -> None: ...

	def delete(self, key: str) -> None: ...


class MemoryStore:
	"""Dict-backed store; contents vanish with the process."""

	def __init__(self, initial: Optional[Dict[str, str]] = None):
		self.data: Dict[str, str] = dict(initial or {})

	def get(self, key: str) -> Optional[str]:
		return self.data.get(key)

	def set(self, key: str, value: str) -> None:
		self.data[key] = value

	def delete(self, key: str) -> None:
		self.data.pop(key, None)


class JsonFileStore:
	"""
	Persists a flat {key: value} map as one JSON object.
	The file is created on first write; a missing or unreadable file reads as empty.
	"""

	def __init__(self, path: str):
		self.path = Path(path)  # normalize path

	def _load(self) -> Dict[str, str]:
		if not self.path.exists():
			return {}
		try:
			with open(self.path, 'r', encoding='utf-8') as f:
				data = json.load(f)
		except (OSError, json.JSONDecodeError) as e:
			logger.warning(f"[Store] Ignoring unreadable store file {self.path}: {e}")
			return {}
		if not isinstance(data, dict):
			logger.warning(f"[Store] Ignoring store file {self.path}: expected a JSON object")
			return {}
		return {str(k): str(v) for k, v in data.items()}

	def _save(self, data: Dict[str, str]):
		self.path.parent.mkdir(parents=True, exist_ok=True)  # ensure directory exists
		tmp = self.path.with_suffix(self.path.suffix + '.tmp')
		with open(tmp, 'w', encoding='utf-8') as f:
			json.dump(data, f, ensure_ascii=False)
		tmp.replace(self.path)  # atomic swap so readers never see half a file

	def get(self, key: str) -> Optional[str]:
		return self._load().get(key)

	def set(self, key: str, value: str) -> None:
		data = self._load()
		data[key] = value
		self._save(data)

	def delete(self, key: str) -> None:
		data = self._load()
		if key in data:
			del data[key]
			self._save(data)
