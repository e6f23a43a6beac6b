"""
连通组件提取工具 - 命令行入口
"""
import argparse
import logging
import sys
from typing import Dict, List, Optional

from findcomp.analyzer_core import ComponentAnalyzer
from findcomp.models import Region
from findcomp.rendering import RenderMode
from findcomp.utils import DEFAULT_MIN_VALID_SIZE, DEFAULT_THRESHOLD, THRESHOLD_RANGE

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(message)s'


def threshold_value(text: str) -> int:
    """argparse 类型：阈值必须在 THRESHOLD_RANGE 内"""
    value = int(text)
    low, high = THRESHOLD_RANGE
    if not low <= value <= high:
        raise argparse.ArgumentTypeError(f"threshold must be in [{low}, {high}], got {value}.")
    return value


def non_negative(text: str) -> int:
    """argparse 类型：非负整数"""
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"size must be a non-negative integer, got {value}.")
    return value


def build_parser() -> argparse.ArgumentParser:
    """构建命令行参数解析器"""
    parser = argparse.ArgumentParser(
        prog='findcomp',
        description="Extract 4-connected foreground components from a binary PGM/PPM image.",
    )
    parser.add_argument('input', help="input PGM (P5) or PPM (P6) file")
    parser.add_argument('-t', '--threshold', type=threshold_value, default=DEFAULT_THRESHOLD,
                        help=f"foreground threshold, sample >= threshold (default: {DEFAULT_THRESHOLD})")
    parser.add_argument('-m', '--min-size', type=non_negative, default=DEFAULT_MIN_VALID_SIZE,
                        help=f"minimum valid component size (default: {DEFAULT_MIN_VALID_SIZE})")
    parser.add_argument('-f', '--filter', type=non_negative, nargs=2, metavar=('MIN', 'MAX'),
                        help="keep only components with MIN <= size <= MAX")
    parser.add_argument('-p', '--print', dest='print_components', action='store_true',
                        help="print every retained component")
    parser.add_argument('-i', '--intensities', action='store_true',
                        help="print min/max/mean input intensity of every retained component")
    parser.add_argument('-w', '--write', metavar='NAME',
                        help="write retained components as a PGM mask")
    parser.add_argument('-c', '--color', metavar='NAME',
                        help="write retained components as a PPM colour mask")
    parser.add_argument('-b', '--boxes', metavar='NAME',
                        help="write the input image with red bounding boxes as PPM")
    parser.add_argument('-v', '--verbose', action='store_true', help="enable debug logging")
    return parser


def format_component(region: Region) -> str:
    """单个组件的报告行"""
    box = region.bounding_box
    if box is None:
        return f"Component {region.id}: size=0"
    x_min, y_min, x_max, y_max = box
    return (f"Component {region.id}: size={region.size}, "
            f"Xmin={x_min}, Ymin={y_min}, Xmax={x_max}, Ymax={y_max}")


def format_intensities(region: Region, stats: Dict[str, float]) -> str:
    """单个组件的灰度报告行"""
    if not stats:
        return f"Component {region.id}: no pixels"
    return (f"Component {region.id}: intensity min={stats['min']}, "
            f"max={stats['max']}, mean={stats['mean']:.1f}")


def print_summary(analyzer: ComponentAnalyzer) -> None:
    """打印组件数量、最小和最大尺寸"""
    print(f"Components: {analyzer.get_component_count()}")
    print(f"Smallest: {analyzer.get_smallest_size()}")
    print(f"Largest: {analyzer.get_largest_size()}")


def main(argv: Optional[List[str]] = None) -> int:
    """主函数"""
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format=LOG_FORMAT)

    analyzer = ComponentAnalyzer()
    try:
        analyzer.load_image(args.input)
    except (OSError, ValueError) as e:
        logger.error(f"无法加载图像: {e}")
        return 1

    count = analyzer.extract_components(args.threshold, args.min_size)
    print(f"Extracted Components: {count}")

    if args.filter:
        min_size, max_size = args.filter
        filtered = analyzer.filter_components_by_size(min_size, max_size)
        print(f"Filtered Components: {filtered}")

    if args.print_components:
        for region in analyzer.get_components():
            print(format_component(region))

    if args.intensities:
        for region in analyzer.get_components():
            print(format_intensities(region, analyzer.get_intensity_statistics(region)))

    outputs = [
        (args.write, RenderMode.MASK),
        (args.color, RenderMode.COLOR_MASK),
        (args.boxes, RenderMode.BOUNDING_BOXES),
    ]
    exit_code = 0
    for name, mode in outputs:
        if not name:
            continue
        try:
            analyzer.write_components(name, mode)
        except (OSError, ValueError) as e:
            logger.error(f"写出结果失败 ({mode.value}): {e}")
            exit_code = 1

    print_summary(analyzer)
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
