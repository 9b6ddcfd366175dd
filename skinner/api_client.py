"""Pager Web API 客户端

读取/写入整个配置对象（listconfig / setconfig），获取 serverid，下载面板图片。
所有网络错误都以 TransportFailure 抛出，由 ConfigStore 决定如何降级。
"""

import json
import logging
from typing import Dict, Any, Optional

import requests

from .errors import TransportFailure
from .settings import AppSettings, get_settings

logger = logging.getLogger(__name__)


class ApiClient:
    """Pager Web API 客户端（同时作为 ConfigStore 的 HTTP 后端）"""

    def __init__(self, settings: Optional[AppSettings] = None,
                 session: Optional[requests.Session] = None):
        self.settings = settings or get_settings()
        self.session = session or requests.Session()

    @property
    def timeout(self):
        return self.settings.get('timeout') or None

    def _auth_params(self) -> Dict[str, str]:
        """获取认证参数，未登录时抛出 TransportFailure"""
        serverid = self.settings.get('serverid')
        token = self.settings.get('token')
        if not serverid or not token:
            raise TransportFailure("未认证: 缺少 serverid 或 token")
        return {'token': token, 'serverid': serverid}

    def send_request(self, action: str, data: Optional[str] = None,
                     authenticated: bool = True) -> requests.Response:
        """向 api.sh 发送请求

        Args:
            action: 接口动作（listconfig / setconfig / getimage ...）
            data: setconfig 时作为请求体，其他动作作为 data 查询参数
            authenticated: 是否附带 token / serverid

        Returns:
            响应对象
        """
        params = {'action': action}
        if authenticated:
            params.update(self._auth_params())

        try:
            if action == 'setconfig':
                response = self.session.post(
                    self.settings.api_url, params=params, data=data,
                    timeout=self.timeout
                )
            else:
                if data:
                    params['data'] = data
                response = self.session.get(
                    self.settings.api_url, params=params, timeout=self.timeout
                )
        except requests.RequestException as e:
            logger.error(f"请求失败: action={action}, 错误: {e}")
            raise TransportFailure(str(e)) from e

        if response.status_code != 200:
            logger.warning(f"请求失败: action={action}, 状态码: {response.status_code}")
            raise TransportFailure(f"{action} 返回状态码 {response.status_code}")
        return response

    def get_config(self) -> Dict[str, Any]:
        """读取完整配置"""
        response = self.send_request('listconfig', authenticated=False)
        try:
            payload = response.json()
        except ValueError as e:
            raise TransportFailure(f"listconfig 返回了无效的 JSON: {e}") from e

        config = payload.get('config') if isinstance(payload, dict) else None
        return config if isinstance(config, dict) else {}

    def set_config(self, config: Dict[str, Any]):
        """覆盖写入完整配置"""
        self.send_request('setconfig', json.dumps(config, ensure_ascii=False))
        logger.debug(f"配置已写入: {len(config)} 个键")

    def fetch_image(self, name: str) -> bytes:
        """下载面板图片（如 pager-fill.svg / pager-border.png）"""
        response = self.send_request('getimage', name)
        return response.content

    def ping(self) -> str:
        """获取 serverid 并保存到设置

        Returns:
            serverid，失败返回空字符串
        """
        try:
            response = self.session.get(self.settings.ping_url, timeout=self.timeout)
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"api_ping 失败: {e}")
            return ""

        serverid = data.get('serverid', '') if isinstance(data, dict) else ''
        if serverid:
            self.settings.save(serverid=serverid)
            logger.info(f"已获取 serverid: {serverid}")
        return serverid
