"""
渲染模块 - 将组件列表绘制为掩码图像或带包围盒的彩色图像
"""
import enum
from typing import Sequence, Tuple

import cv2
import numpy as np

from findcomp.models import Raster, Region
from findcomp.utils import BOX_COLOR, BOX_THICKNESS, FOREGROUND, MASK_COLOR, in_bounds


class RenderMode(enum.Enum):
    """渲染模式"""
    MASK = 'mask'                      # 单通道掩码 (PGM)
    COLOR_MASK = 'color_mask'          # 彩色掩码 (PPM)
    BOUNDING_BOXES = 'bounding_boxes'  # 原图 + 红色包围盒 (PPM)

    @property
    def is_color(self) -> bool:
        return self is not RenderMode.MASK


def clamp_bounding_box(box: Tuple[int, int, int, int], width: int, height: int) -> Tuple[int, int, int, int]:
    """将包围盒限制在 [0, width-1] x [0, height-1] 内，越界反转时交换最小/最大值"""
    x_min, y_min, x_max, y_max = box
    x_min = max(0, min(x_min, width - 1))
    y_min = max(0, min(y_min, height - 1))
    x_max = max(0, min(x_max, width - 1))
    y_max = max(0, min(y_max, height - 1))
    if x_min > x_max:
        x_min, x_max = x_max, x_min
    if y_min > y_max:
        y_min, y_max = y_max, y_min
    return x_min, y_min, x_max, y_max


def _paint_pixels(canvas: np.ndarray, regions: Sequence[Region], value) -> None:
    height, width = canvas.shape[:2]
    for region in regions:
        for x, y in region.pixels:
            if in_bounds(x, y, width, height):
                canvas[y, x] = value


def render_components(raster: Raster, regions: Sequence[Region], mode: RenderMode) -> np.ndarray:
    """按指定模式渲染组件

    Args:
        raster (Raster): 原始栅格，决定画布尺寸，包围盒模式下作为底图
        regions (Sequence[Region]): 待绘制的组件
        mode (RenderMode): 渲染模式

    Returns:
        np.ndarray: MASK 模式为 (H, W) uint8，其余为 (H, W, 3) RGB uint8
    """
    height, width = raster.height, raster.width

    if mode is RenderMode.MASK:
        canvas = np.zeros((height, width), dtype=np.uint8)
        _paint_pixels(canvas, regions, FOREGROUND)
        return canvas

    if mode is RenderMode.COLOR_MASK:
        canvas = np.zeros((height, width, 3), dtype=np.uint8)
        _paint_pixels(canvas, regions, MASK_COLOR)
        return canvas

    canvas = cv2.cvtColor(np.ascontiguousarray(raster.samples), cv2.COLOR_GRAY2RGB)
    for region in regions:
        box = region.bounding_box
        if box is None:
            continue
        x_min, y_min, x_max, y_max = clamp_bounding_box(box, width, height)
        cv2.rectangle(canvas, (x_min, y_min), (x_max, y_max), BOX_COLOR, BOX_THICKNESS)
    return canvas
