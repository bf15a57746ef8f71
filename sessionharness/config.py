"""配置管理：从 YAML 加载会话配置并提供访问接口"""
import yaml
from pathlib import Path
from typing import Dict, Optional


class Config:
    def __init__(self, path: str = None, data: Optional[dict] = None):
        self.path = Path(path) if path else None
        self._data = dict(data or {})
        if self.path is not None:
            self.load()

    def load(self):
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}
        except FileNotFoundError:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ValueError(f"配置文件 {self.path} 必须是YAML映射")
        self._data.update(loaded)

    def get(self, key, default=None):
        return self._data.get(key, default)

    def as_dict(self):
        return dict(self._data)

    @property
    def base_url(self) -> Optional[str]:
        return self._data.get('base_url')

    @property
    def default_headers(self) -> Dict[str, str]:
        return {str(k): str(v) for k, v in (self._data.get('default_headers') or {}).items()}

    @property
    def log_level(self) -> Optional[str]:
        level = self._data.get('log_level')
        return str(level).upper() if level else None
