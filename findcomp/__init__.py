"""
findcomp - 灰度图像连通组件提取工具
"""
__version__ = "1.0.0"
