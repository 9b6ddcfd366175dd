"""资源文件处理

上传的图片以 data URI 的形式直接保存在配置中；远程 URL 原样保存。
"""

import base64
import io
import mimetypes
import os
from typing import Iterable, Optional, Tuple
from urllib.parse import unquote_to_bytes

import requests
from PIL import Image, UnidentifiedImageError

from .errors import AssetTooLarge
from .logger import get_logger

logger = get_logger('assets')

# 单个资源上限 500KB
MAX_ASSET_SIZE = 500 * 1024


def is_data_uri(url: str) -> bool:
    return url.startswith('data:')


def _split_data_uri(url: str) -> Tuple[str, bool, str]:
    """拆分 data URI

    Returns:
        (媒体类型, 是否 base64, 数据部分)
    """
    header, _, data = url[5:].partition(',')
    is_base64 = header.endswith(';base64')
    mime = header[:-7] if is_base64 else header
    return mime or 'text/plain', is_base64, data


def payload_size(url: str) -> int:
    """计算资源的实际数据大小

    data URI 按解码后的字节数计算，其他 URL 按字符串本身的字节数计算
    """
    if not is_data_uri(url):
        return len(url.encode('utf-8'))

    _, is_base64, data = _split_data_uri(url)
    if is_base64:
        data = ''.join(data.split())
        padding = len(data) - len(data.rstrip('='))
        return max(len(data) * 3 // 4 - padding, 0)
    return len(unquote_to_bytes(data))


def check_size(size: int, limit: int = MAX_ASSET_SIZE):
    """超过上限时抛出 AssetTooLarge"""
    if size > limit:
        raise AssetTooLarge(size, limit)


def encode_data_uri(data: bytes, mime: str) -> str:
    """将字节数据编码为 data URI"""
    encoded = base64.b64encode(data).decode('ascii')
    return f"data:{mime};base64,{encoded}"


def decode_data_uri(url: str) -> bytes:
    """解码 data URI 中的数据"""
    _, is_base64, data = _split_data_uri(url)
    if is_base64:
        return base64.b64decode(data)
    return unquote_to_bytes(data)


def detect_mime(data: bytes, filename: str = "") -> str:
    """识别图片类型

    优先用 Pillow 识别图片格式，识别不了（如 SVG）时按文件扩展名猜测
    """
    try:
        with Image.open(io.BytesIO(data)) as image:
            mime = Image.MIME.get(image.format or '')
            if mime:
                return mime
    except (UnidentifiedImageError, OSError):
        pass

    guessed, _ = mimetypes.guess_type(filename)
    return guessed or 'application/octet-stream'


def read_upload(file_path: str, limit: int = MAX_ASSET_SIZE) -> str:
    """读取上传的图片文件并转为 data URI

    在读取前先检查文件大小，超过上限不会读取文件

    Args:
        file_path: 图片文件路径
        limit: 大小上限（字节）

    Returns:
        data URI
    """
    check_size(os.path.getsize(file_path), limit)

    with open(file_path, 'rb') as f:
        data = f.read()

    mime = detect_mime(data, os.path.basename(file_path))
    logger.info(f"已读取上传文件: {os.path.basename(file_path)} ({len(data) / 1024:.1f}KB, {mime})")
    return encode_data_uri(data, mime)


def load_asset_bytes(url: str, session: Optional[requests.Session] = None,
                     timeout: Optional[float] = 10) -> bytes:
    """获取资源的图片数据，用于渲染

    Returns:
        图片字节，远程下载失败返回空字节
    """
    if is_data_uri(url):
        try:
            return decode_data_uri(url)
        except ValueError as e:
            logger.error(f"data URI 解码失败: {e}")
            return b""

    try:
        response = (session or requests).get(url, timeout=timeout)
        if response.status_code == 200:
            return response.content
        logger.warning(f"资源下载失败: {url}, 状态码: {response.status_code}")
    except requests.RequestException as e:
        logger.error(f"资源下载失败: {url}, 错误: {e}")
    return b""


class AssetCache:
    """渲染用的图片缓存

    只保留当前使用中的 URL 的数据；获取失败的 URL 会被记住，
    在它仍被使用期间不再重复请求。
    """

    def __init__(self):
        self._data = {}
        self._failed = set()
        self._pending = set()

    def get(self, url: str) -> Optional[bytes]:
        return self._data.get(url)

    def needs_fetch(self, url: str) -> bool:
        return url not in self._data and url not in self._failed and url not in self._pending

    def begin_fetch(self, url: str):
        self._pending.add(url)

    def finish_fetch(self, url: str, data: bytes, in_use: bool = True) -> bool:
        """记录获取结果

        Returns:
            是否获取成功
        """
        self._pending.discard(url)
        if not data:
            if in_use:
                self._failed.add(url)
            return False
        if in_use:
            self._data[url] = data
        return True

    def retain(self, urls: Iterable[Optional[str]]):
        """丢弃不在 urls 中的数据和失败记录"""
        keep = {url for url in urls if url}
        self._data = {url: data for url, data in self._data.items() if url in keep}
        self._failed &= keep
