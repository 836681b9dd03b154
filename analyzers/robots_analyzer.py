"""
Robots/sitemap analyzer: checks /robots.txt and /sitemap.xml on the audited
origin. The two probes run side by side and fail independently.
"""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from analyzers.base import BaseAnalyzer
from crawler.robots import build_origin_url, fetch_and_parse_robots
from crawler.sitemap import fetch_sitemap
from models import RobotsResult, RobotsTxtInfo, SitemapInfo


class RobotsSitemapAnalyzer(BaseAnalyzer):
    name = "Robots"

    def analyze(self, url: str) -> RobotsResult:
        robots_url = build_origin_url(url, "/robots.txt")
        sitemap_url = build_origin_url(url, "/sitemap.xml")

        with ThreadPoolExecutor(max_workers=2) as executor:
            robots_future = executor.submit(self._robots, robots_url)
            sitemap_future = executor.submit(self._sitemap, sitemap_url)
            robots_txt = robots_future.result()
            sitemap = sitemap_future.result()

        return RobotsResult(robots_txt=robots_txt, sitemap=sitemap)

    def _robots(self, robots_url: str) -> RobotsTxtInfo:
        with self.session_factory() as session:
            return fetch_and_parse_robots(robots_url, session)

    def _sitemap(self, sitemap_url: str) -> SitemapInfo:
        with self.session_factory() as session:
            return fetch_sitemap(sitemap_url, session)
