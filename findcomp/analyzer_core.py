"""
组件分析核心模块 - 包含ComponentAnalyzer类，持有一幅栅格和当前组件列表
"""
import logging
import math
from pathlib import Path
from typing import Dict, List, Optional, Union

import numpy as np

from findcomp import labeling
from findcomp.models import Raster, Region
from findcomp.pnm_io import read_pnm, write_pgm, write_ppm
from findcomp.rendering import RenderMode, render_components
from findcomp.utils import DEFAULT_MIN_VALID_SIZE, DEFAULT_THRESHOLD

logger = logging.getLogger(__name__)


class ComponentAnalyzer:
    """连通组件分析核心类

    每个实例独立拥有一幅栅格和一个组件列表。提取和过滤都整体替换列表，
    列表中的区域对象已封存，可被多个读者共享。
    """

    def __init__(self, raster: Optional[Raster] = None):
        self.raster: Raster = raster if raster is not None else Raster.empty()
        self.components: List[Region] = []

    def load_image(self, path: Union[str, Path]) -> Raster:
        """加载图像，替换当前栅格并清空组件"""
        self.raster = read_pnm(path)
        self.components = []
        return self.raster

    def set_raster(self, raster: Raster):
        self.raster = raster
        self.components = []

    def has_valid_raster(self) -> bool:
        return self.raster.is_valid()

    def get_width(self) -> int:
        return self.raster.width

    def get_height(self) -> int:
        return self.raster.height

    def clear_components(self):
        """清空所有组件"""
        self.components = []

    # ===== 提取与过滤 =====
    def extract_components(self, threshold: int = DEFAULT_THRESHOLD,
                           min_valid_size: int = DEFAULT_MIN_VALID_SIZE) -> int:
        """提取连通组件

        Args:
            threshold (int): 二值化阈值，sample >= threshold 为前景
            min_valid_size (int): 最小有效组件尺寸

        Returns:
            int: 保留的组件数
        """
        if not self.has_valid_raster():
            logger.warning("没有可用的栅格，组件列表为空")
            self.components = []
            return 0

        self.components = labeling.extract_components(self.raster, threshold, min_valid_size)
        return len(self.components)

    def filter_components_by_size(self, min_size: int, max_size=math.inf) -> int:
        """只保留尺寸在 [min_size, max_size] 内的组件

        Returns:
            int: 过滤后的组件数
        """
        filtered = labeling.filter_components_by_size(self.components, min_size, max_size)
        if not filtered:
            logger.warning(f"没有组件满足尺寸条件 [{min_size}, {max_size}]")
        else:
            logger.debug(f"尺寸过滤: {len(self.components)} -> {len(filtered)}")
        self.components = filtered
        return len(self.components)

    # ===== 统计方法 =====
    def get_components(self) -> List[Region]:
        return list(self.components)

    def get_component_count(self) -> int:
        return labeling.component_count(self.components)

    def get_largest_size(self) -> int:
        return labeling.largest_size(self.components)

    def get_smallest_size(self) -> int:
        return labeling.smallest_size(self.components)

    def get_statistics(self) -> Dict[str, object]:
        """获取组件尺寸的统计信息"""
        return labeling.region_statistics(self.components)

    def get_component_intensities(self, region: Region) -> np.ndarray:
        """按像素发现顺序返回组件在原始栅格中的灰度值"""
        if not region.pixels:
            return np.zeros(0, dtype=np.uint8)
        xs, ys = zip(*region.pixels)
        return self.raster.samples[list(ys), list(xs)]

    def get_intensity_statistics(self, region: Region) -> Dict[str, float]:
        """获取单个组件的灰度统计 (min, max, mean)，空组件返回 {}"""
        values = self.get_component_intensities(region)
        if values.size == 0:
            return {}
        return {
            'min': int(values.min()),
            'max': int(values.max()),
            'mean': float(values.mean()),
        }

    # ===== 可视化方法 =====
    def get_visualization(self, mode: RenderMode = RenderMode.MASK) -> np.ndarray:
        """获取可视化结果"""
        if not self.has_valid_raster():
            raise ValueError("请先加载图像")
        return render_components(self.raster, self.components, mode)

    def write_components(self, path: Union[str, Path], mode: RenderMode = RenderMode.MASK) -> Path:
        """渲染并写出结果图像，MASK 写为 PGM，其余模式写为 PPM"""
        image = self.get_visualization(mode)
        if mode.is_color:
            return write_ppm(path, image)
        return write_pgm(path, image)
