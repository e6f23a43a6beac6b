"""
PNM 读写模块 - 读取二进制 PGM(P5)/PPM(P6)，写出掩码和彩色结果图像
"""
import logging
from pathlib import Path
from typing import List, Tuple, Union

import cv2
import numpy as np

from findcomp.models import Raster
from findcomp.utils import LUMA_WEIGHTS, MAX_SAMPLE_VALUE

logger = logging.getLogger(__name__)

PGM_MAGIC = b'P5'
PPM_MAGIC = b'P6'
_WHITESPACE = b' \t\r\n\v\f'


def is_ppm_file(path: Union[str, Path]) -> bool:
    """根据扩展名判断是否为 PPM 文件"""
    return Path(path).suffix.lower() == '.ppm'


def _parse_header(data: bytes) -> Tuple[List[bytes], int]:
    """解析头部四个字段 (magic, width, height, maxval)，跳过 # 注释

    Returns:
        tuple: (字段列表, 像素数据起始偏移)
    """
    tokens: List[bytes] = []
    pos = 0
    size = len(data)
    while len(tokens) < 4:
        while pos < size and data[pos] in _WHITESPACE:
            pos += 1
        if pos < size and data[pos:pos + 1] == b'#':
            while pos < size and data[pos:pos + 1] != b'\n':
                pos += 1
            continue
        if pos >= size:
            raise ValueError("PNM 头部不完整")
        start = pos
        while pos < size and data[pos] not in _WHITESPACE and data[pos:pos + 1] != b'#':
            pos += 1
        tokens.append(data[start:pos])

    # maxval 之后紧跟一个空白字节
    if pos >= size or data[pos] not in _WHITESPACE:
        raise ValueError("PNM 头部之后缺少分隔符")
    return tokens, pos + 1


def read_pnm(path: Union[str, Path]) -> Raster:
    """读取二进制 PGM/PPM 图像，PPM 按亮度公式转为灰度

    Raises:
        FileNotFoundError: 文件不存在
        ValueError: 格式错误、尺寸非法、最大值不是255或数据不完整
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"无法打开文件: {path}")
    # 手动解析头部：cv2.imread 不暴露 maxval，无法校验 maxval == 255
    data = path.read_bytes()

    tokens, offset = _parse_header(data)
    magic = tokens[0]
    if magic not in (PGM_MAGIC, PPM_MAGIC):
        raise ValueError(f"无效的 PGM/PPM 文件: {path} (magic={magic!r})")

    try:
        width, height, max_val = (int(t) for t in tokens[1:])
    except ValueError:
        raise ValueError(f"无法解析图像头部: {path}") from None

    if width <= 0 or height <= 0:
        raise ValueError(f"无效的图像尺寸: {width}x{height}")
    if max_val != MAX_SAMPLE_VALUE:
        raise ValueError(f"不支持的最大值: {max_val}")

    channels = 3 if magic == PPM_MAGIC else 1
    expected = width * height * channels
    payload = data[offset:offset + expected]
    if len(payload) < expected:
        raise ValueError(f"图像数据不完整: 需要 {expected} 字节，实际 {len(payload)} 字节")

    samples = np.frombuffer(payload, dtype=np.uint8)
    if channels == 3:
        rgb = samples.reshape(height, width, 3).astype(np.float64)
        r_w, g_w, b_w = LUMA_WEIGHTS
        gray = (r_w * rgb[:, :, 0] + g_w * rgb[:, :, 1] + b_w * rgb[:, :, 2]).astype(np.uint8)
    else:
        gray = samples.reshape(height, width)

    logger.debug(f"已读取 {path.name}: {width}x{height}, {'PPM' if channels == 3 else 'PGM'}")
    return Raster(width=width, height=height, max_sample=max_val, samples=gray)


def _with_suffix(path: Union[str, Path], suffix: str) -> Path:
    path = Path(path)
    if path.suffix.lower() == suffix:
        return path
    return path.with_name(path.name + suffix)


def _imwrite(out_path: Path, image: np.ndarray) -> Path:
    try:
        ok = cv2.imwrite(str(out_path), image)
    except cv2.error as e:
        raise OSError(f"无法写入文件: {out_path}") from e
    if not ok:
        raise OSError(f"无法写入文件: {out_path}")
    logger.info(f"已写入 {out_path}")
    return out_path


def write_pgm(path: Union[str, Path], mask: np.ndarray) -> Path:
    """写出单通道 PGM 图像，缺少扩展名时追加 .pgm"""
    return _imwrite(_with_suffix(path, '.pgm'), np.ascontiguousarray(mask, dtype=np.uint8))


def write_ppm(path: Union[str, Path], rgb: np.ndarray) -> Path:
    """写出 RGB 彩色 PPM 图像，缺少扩展名时追加 .ppm"""
    bgr = cv2.cvtColor(np.ascontiguousarray(rgb, dtype=np.uint8), cv2.COLOR_RGB2BGR)
    return _imwrite(_with_suffix(path, '.ppm'), bgr)
