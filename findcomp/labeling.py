"""
连通组件提取模块 - 二值化、4邻域广度优先标记、尺寸过滤与统计
"""
import logging
from collections import deque
from typing import Dict, List, Sequence

import numpy as np

from findcomp.models import Raster, Region
from findcomp.utils import BACKGROUND, FOREGROUND, neighbors_4

logger = logging.getLogger(__name__)


def binarize(raster: Raster, threshold: int) -> np.ndarray:
    """按 sample >= threshold 生成二值化工作副本，不修改原始栅格"""
    binary = np.full(raster.samples.shape, BACKGROUND, dtype=np.uint8)
    binary[raster.samples >= threshold] = FOREGROUND
    return binary


def extract_components(raster: Raster, threshold: int, min_valid_size: int) -> List[Region]:
    """提取4连通前景组件

    按行优先顺序扫描，每遇到未处理的前景像素就以先进先出队列做广度优先搜索，
    邻居检查顺序固定为北、东、南、西。每个被发现的区域都消耗一个编号，
    像素数小于 min_valid_size 的区域被丢弃，其编号不再复用。

    Args:
        raster (Raster): 输入灰度栅格
        threshold (int): 二值化阈值
        min_valid_size (int): 最小有效组件尺寸

    Returns:
        List[Region]: 按种子像素发现顺序排列的封存区域
    """
    # 不可用的栅格（零尺寸、最大值不是255、样本数不符）返回空结果
    if not raster.is_valid():
        return []
    width, height = raster.width, raster.height

    # 扁平列表做工作副本，访问后置为背景
    working = (binarize(raster, threshold).ravel() == FOREGROUND).tolist()

    regions: List[Region] = []
    next_id = 0
    for y in range(height):
        row = y * width
        for x in range(width):
            if not working[row + x]:
                continue

            # 每个被发现的区域都消耗编号，被丢弃区域的编号不复用，保留区域的编号可能不连续
            # (旧版C++实现只在保留区域时递增，编号连续)
            region = Region(id=next_id)
            next_id += 1

            working[row + x] = False
            region.add_pixel(x, y)
            queue = deque([(x, y)])

            while queue:
                cx, cy = queue.popleft()
                for nx, ny in neighbors_4(cx, cy, width, height):
                    index = ny * width + nx
                    if working[index]:
                        working[index] = False
                        region.add_pixel(nx, ny)
                        queue.append((nx, ny))

            if region.size >= min_valid_size:
                regions.append(region.seal())

    logger.debug(f"发现 {next_id} 个区域，保留 {len(regions)} 个 (阈值={threshold}, 最小尺寸={min_valid_size})")
    return regions


def filter_components_by_size(regions: Sequence[Region], min_size, max_size) -> List[Region]:
    """保留尺寸在 [min_size, max_size] 闭区间内的组件，保持原有顺序

    min_size > max_size 合法，结果为空列表。区域对象原样传递。
    """
    return [r for r in regions if min_size <= r.size <= max_size]


# ===== 统计方法 =====
def component_count(regions: Sequence[Region]) -> int:
    return len(regions)


def largest_size(regions: Sequence[Region]) -> int:
    """最大组件尺寸，空列表返回0"""
    return max((r.size for r in regions), default=0)


def smallest_size(regions: Sequence[Region]) -> int:
    """最小组件尺寸，空列表返回0"""
    return min((r.size for r in regions), default=0)


def region_statistics(regions: Sequence[Region]) -> Dict[str, object]:
    """获取组件尺寸的统计信息

    Returns:
        Dict[str, object]: 包含 count, largest, smallest, total_pixels, mean_size, sizes
    """
    sizes = [r.size for r in regions]
    return {
        'count': len(sizes),
        'largest': largest_size(regions),
        'smallest': smallest_size(regions),
        'total_pixels': int(sum(sizes)),
        'mean_size': float(np.mean(sizes)) if sizes else 0.0,
        'sizes': sizes,
    }
