"""
Profile Configuration

集中管理 PQGram profile 與距離計算的參數，可由 dict 或 JSON 檔載入。
"""

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union


@dataclass
class ProfileConfig:
    """
    PQGram 參數

    Attributes:
        p: 祖先視窗大小
        q: 兄弟視窗大小
        sort: 建構後是否排序 profile（距離計算需要排序）
        filler_value: 取代 FILLER 的值，None 表示使用標籤型別預設值
    """

    p: int = 2
    q: int = 3
    sort: bool = True
    filler_value: Optional[Any] = None

    def __post_init__(self):
        for name in ('p', 'q'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            if value < 0:
                raise ValueError(f"{name} must be >= 0, got {value}")

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> 'ProfileConfig':
        """
        由 dict 建立設定，未知的鍵會被拒絕

        Raises:
            ValueError: 含有未知的鍵或參數無效
        """
        unknown = set(config) - {'p', 'q', 'sort', 'filler_value'}
        if unknown:
            raise ValueError(f"Unknown profile config keys: {sorted(unknown)}")
        return cls(**config)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> 'ProfileConfig':
        """
        由 JSON 檔載入設定

        設定可以放在頂層，或放在 ``"pqgram"`` 區段下。
        """
        with open(Path(path), 'r') as f:
            config = json.load(f)
        return cls.from_dict(config.get('pqgram', config))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
