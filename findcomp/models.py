"""
数据模型模块 - 定义栅格图像和连通区域数据类
"""
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np

from findcomp.utils import MAX_SAMPLE_VALUE

_UNSET = float('inf')


@dataclass(frozen=True, eq=False)
class Raster:
    """单字节灰度栅格，samples 形状为 (height, width)"""
    width: int
    height: int
    max_sample: int
    samples: np.ndarray

    def __post_init__(self):
        # 解码后不可修改
        samples = np.array(self.samples, dtype=np.uint8, copy=True)
        samples.flags.writeable = False
        object.__setattr__(self, 'samples', samples)

    @classmethod
    def empty(cls) -> 'Raster':
        """未初始化的 0x0 栅格"""
        return cls(0, 0, 0, np.zeros((0, 0), dtype=np.uint8))

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def is_valid(self) -> bool:
        """栅格是否可用于组件提取"""
        return (self.width > 0 and self.height > 0
                and self.max_sample == MAX_SAMPLE_VALUE
                and self.samples.size == self.pixel_count)


@dataclass
class Region:
    """连通区域：编号、按发现顺序排列的像素坐标，以及增量维护的包围盒

    size 总是由像素列表推导，不单独存储。封存后 pixels 为元组，任何属性都不可再赋值。
    """
    id: int
    pixels: Sequence[Tuple[int, int]] = field(default_factory=list)
    x_min: float = field(default=_UNSET, init=False)
    y_min: float = field(default=_UNSET, init=False)
    x_max: float = field(default=-_UNSET, init=False)
    y_max: float = field(default=-_UNSET, init=False)
    sealed: bool = field(default=False, init=False, repr=False, compare=False)

    def __post_init__(self):
        self.pixels = list(self.pixels)
        for x, y in self.pixels:
            self._update_bounding(x, y)

    @classmethod
    def from_pixels(cls, region_id: int, pixels: Iterable[Tuple[int, int]]) -> 'Region':
        """由完整像素列表创建区域，包围盒对全部像素折叠计算"""
        return cls(id=region_id, pixels=list(pixels))

    @property
    def size(self) -> int:
        return len(self.pixels)

    @property
    def bounding_box(self) -> Optional[Tuple[int, int, int, int]]:
        """返回 (x_min, y_min, x_max, y_max)，空区域返回 None"""
        if not self.pixels:
            return None
        return (int(self.x_min), int(self.y_min), int(self.x_max), int(self.y_max))

    def add_pixel(self, x: int, y: int):
        """追加一个像素并更新包围盒"""
        if self.sealed:
            raise ValueError(f"区域 #{self.id} 已封存，不可修改")
        self.pixels.append((x, y))
        self._update_bounding(x, y)

    def seal(self) -> 'Region':
        """封存区域，像素列表转为元组，之后只读"""
        self.pixels = tuple(self.pixels)
        self.sealed = True
        return self

    def __setattr__(self, name, value):
        if getattr(self, 'sealed', False):
            raise ValueError(f"区域 #{self.id} 已封存，不可修改")
        super().__setattr__(name, value)

    def _update_bounding(self, x: int, y: int):
        if x < self.x_min:
            self.x_min = x
        if x > self.x_max:
            self.x_max = x
        if y < self.y_min:
            self.y_min = y
        if y > self.y_max:
            self.y_max = y
