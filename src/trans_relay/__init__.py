"""
Trans-Relay：把待翻译文档队列提交给翻译供应商，并回写上传结果。
"""

__version__ = "0.3.0"
