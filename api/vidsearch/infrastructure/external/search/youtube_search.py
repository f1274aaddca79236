import json
import logging
from typing import Any, Dict, List, Optional, Tuple

import httpx
from bs4 import BeautifulSoup

from vidsearch.domain.external.search import SearchProvider
from vidsearch.domain.models.search import ProviderPage, SearchOptions, VideoItem

logger = logging.getLogger(__name__)

_INITIAL_DATA_MARKERS = ("var ytInitialData", 'window["ytInitialData"]')
_YTCFG_MARKER = "ytcfg.set({"


def _text(node: Optional[Dict[str, Any]]) -> str:
    """提取InnerTube文本节点(simpleText或runs)中的文字"""
    if not node:
        return ""
    if "simpleText" in node:
        return node["simpleText"]
    return "".join(run.get("text", "") for run in node.get("runs", []))


def _decode_object_after(text: str, start: int) -> Dict[str, Any]:
    """从start之后的第一个`{`开始解析一个完整的JSON对象"""
    brace = text.index("{", start)
    value, _ = json.JSONDecoder().raw_decode(text, brace)
    return value


def _parse_results_page(html_text: str) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """解析搜索结果页，返回(ytInitialData, ytcfg)"""
    soup = BeautifulSoup(html_text, "html.parser")
    initial_data: Optional[Dict[str, Any]] = None
    ytcfg: Dict[str, Any] = {}

    for script in soup.find_all("script"):
        content = script.string or ""
        if initial_data is None:
            for marker in _INITIAL_DATA_MARKERS:
                index = content.find(marker)
                if index != -1:
                    initial_data = _decode_object_after(content, index)
                    break
        index = content.find(_YTCFG_MARKER)
        while index != -1:
            ytcfg.update(_decode_object_after(content, index))
            index = content.find(_YTCFG_MARKER, index + len(_YTCFG_MARKER))

    if initial_data is None:
        raise ValueError("ytInitialData not found in search results page")
    return initial_data, ytcfg


def _parse_video(renderer: Dict[str, Any], base_url: str) -> VideoItem:
    thumbnails = renderer.get("thumbnail", {}).get("thumbnails", [])
    return VideoItem(
        id=renderer["videoId"],
        title=_text(renderer.get("title")),
        url=f"{base_url}/watch?v={renderer['videoId']}",
        thumbnail=thumbnails[-1].get("url") if thumbnails else None,
        duration=_text(renderer.get("lengthText")) or None,
        views=_text(renderer.get("viewCountText")) or None,
        author=_text(renderer.get("ownerText")) or None,
        uploaded_at=_text(renderer.get("publishedTimeText")) or None,
    )


def _collect(node: Any, base_url: str) -> Tuple[List[Dict[str, Any]], Optional[str]]:
    """遍历响应数据，按出现顺序收集视频条目与最后一个续页token"""
    videos: List[Dict[str, Any]] = []
    token: Optional[str] = None
    stack = [node]

    while stack:
        current = stack.pop()
        if isinstance(current, list):
            stack.extend(reversed(current))
            continue
        if not isinstance(current, dict):
            continue

        if "videoRenderer" in current:
            try:
                video = _parse_video(current["videoRenderer"], base_url)
                videos.append(video.model_dump())
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"YouTube搜索结果解析失败: {str(e)}")
            continue

        if "continuationItemRenderer" in current:
            command = (
                current["continuationItemRenderer"]
                .get("continuationEndpoint", {})
                .get("continuationCommand", {})
            )
            token = command.get("token") or token
            continue

        stack.extend(reversed(list(current.values())))

    return videos, token


class YouTubeSearchProvider(SearchProvider):
    """基于YouTube网页与InnerTube接口的视频搜索提供者"""

    def __init__(
        self,
        base_url: str = "https://www.youtube.com",
        hl: str = "en",
        gl: str = "US",
        client_version: str = "2.20240101.00.00",
        safe_search_cookie: str = "PREF=f2=8000000",
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """构造函数，完成YouTube搜索提供者初始化，涵盖基础URL、语言地区与headers"""
        self.base_url = base_url.rstrip("/")
        self.hl = hl
        self.gl = gl
        self.client_version = client_version
        self.safe_search_cookie = safe_search_cookie
        self.timeout = timeout
        self.headers = {
            "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/143.0.0.0 Safari/537.36",
            "Accept-Language": f"{hl}-{gl},{hl};q=0.9",
        }
        self._transport = transport

    def _client(self, safe_search: bool) -> httpx.AsyncClient:
        headers = dict(self.headers)
        if safe_search:
            headers["Cookie"] = self.safe_search_cookie
        return httpx.AsyncClient(
            headers=headers,
            timeout=self.timeout,
            follow_redirects=True,
            transport=self._transport,
        )

    def _build_context(self, client_version: str) -> Dict[str, Any]:
        return {
            "client": {
                "utcOffsetMinutes": 0,
                "gl": self.gl,
                "hl": self.hl,
                "clientName": "WEB",
                "clientVersion": client_version,
            },
            "user": {},
            "request": {},
        }

    async def _fetch_continuation(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        token: str,
        context: Dict[str, Any],
    ) -> Tuple[List[Dict[str, Any]], Optional[str]]:
        response = await client.post(
            f"{self.base_url}/youtubei/v1/search",
            params={"key": api_key, "prettyPrint": "false"},
            json={"context": context, "continuation": token},
        )
        response.raise_for_status()
        data = response.json()
        return _collect(data.get("onResponseReceivedCommands", []), self.base_url)

    async def search(self, term: str, options: SearchOptions) -> ProviderPage:
        """请求搜索结果页并按需翻页，直到凑够limit条或达到pages页"""
        # 1.构建请求参数
        params = {"search_query": term, "hl": self.hl, "gl": self.gl}

        async with self._client(options.safe_search) as client:
            # 2.请求搜索结果页并解析ytInitialData/ytcfg
            response = await client.get(f"{self.base_url}/results", params=params)
            response.raise_for_status()
            initial_data, ytcfg = _parse_results_page(response.text)

            api_key = ytcfg.get("INNERTUBE_API_KEY")
            if not api_key:
                raise ValueError("INNERTUBE_API_KEY not found in search results page")
            context = self._build_context(
                ytcfg.get("INNERTUBE_CLIENT_VERSION") or self.client_version
            )

            # 3.提取第一页的视频条目与续页token
            videos, token = _collect(initial_data, self.base_url)

            # 4.条目不足且还允许翻页时继续请求
            fetched_pages = 1
            while token and len(videos) < options.limit and fetched_pages < options.pages:
                more, token = await self._fetch_continuation(
                    client, api_key, token, context
                )
                videos.extend(more)
                fetched_pages += 1

        logger.info(f"YouTube搜索完成: {term}, 条目数: {len(videos)}")

        # 5.没有续页token时不返回continuation
        if not token:
            return ProviderPage(items=videos[: options.limit], continuation=None)

        state = {
            "limit": None,
            "safeSearch": options.safe_search,
            "pages": options.pages,
            "requestOptions": {},
            "query": {"gl": self.gl, "hl": self.hl, "search_query": term},
            "search": term,
        }
        return ProviderPage(
            items=videos[: options.limit],
            continuation=[api_key, token, context, state],
        )

    async def continue_search(self, continuation: List[Any]) -> ProviderPage:
        """根据[api_key, token, context, state]结构请求下一页"""
        # 1.只接受本提供者生成的continuation结构
        if (
            len(continuation) != 4
            or not isinstance(continuation[0], str)
            or not isinstance(continuation[1], str)
            or not isinstance(continuation[2], dict)
            or not isinstance(continuation[3], dict)
        ):
            raise ValueError("Unsupported continuation payload for YouTube search")
        api_key, token, context, state = continuation

        # 2.调用InnerTube接口获取下一页
        async with self._client(bool(state.get("safeSearch"))) as client:
            videos, next_token = await self._fetch_continuation(
                client, api_key, token, context
            )

        logger.info(f"YouTube续页搜索完成, 条目数: {len(videos)}")

        # 3.构建新的continuation，状态信息原样带回
        if not next_token:
            return ProviderPage(items=videos, continuation=None)
        return ProviderPage(
            items=videos, continuation=[api_key, next_token, context, state]
        )
