"""
工具模块 - 常量定义和邻域工具函数
"""
from typing import Iterator, Tuple

# ==================== 常量定义 ====================
# 提取
DEFAULT_THRESHOLD = 128               # 默认二值化阈值
DEFAULT_MIN_VALID_SIZE = 1            # 默认最小有效组件尺寸(像素)
THRESHOLD_RANGE = (0, 255)            # 阈值合法范围

# 图像格式
MAX_SAMPLE_VALUE = 255                # 仅支持单字节样本
FOREGROUND = 255                      # 前景像素值
BACKGROUND = 0                        # 背景像素值
LUMA_WEIGHTS = (0.299, 0.587, 0.114)  # 彩色转灰度权重 (R, G, B)

# 渲染
MASK_COLOR = (255, 255, 255)          # 彩色掩码中组件像素颜色
BOX_COLOR = (255, 0, 0)               # 包围盒颜色 (RGB 红色)
BOX_THICKNESS = 1                     # 包围盒线宽

# 4邻域偏移，固定顺序：北、东、南、西
NEIGHBOR_OFFSETS = ((0, -1), (1, 0), (0, 1), (-1, 0))


def in_bounds(x: int, y: int, width: int, height: int) -> bool:
    """判断坐标是否在图像范围内"""
    return 0 <= x < width and 0 <= y < height


def neighbors_4(x: int, y: int, width: int, height: int) -> Iterator[Tuple[int, int]]:
    """按北、东、南、西顺序生成图像范围内的4邻域坐标"""
    for dx, dy in NEIGHBOR_OFFSETS:
        nx, ny = x + dx, y + dy
        if in_bounds(nx, ny, width, height):
            yield nx, ny
