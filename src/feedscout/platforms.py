"""Platform handlers that derive feed URIs from well-known site URL layouts."""

from __future__ import annotations

import re
from urllib.parse import parse_qs, quote, urlsplit

from .matching import is_any_of
from .models import PlatformContext


def _origin(url: str) -> str:
    parsed = urlsplit(url)
    return f"{parsed.scheme}://{parsed.netloc}"


def _hostname(url: str) -> str:
    return (urlsplit(url).hostname or "").lower()


class GithubHandler:
    """User, organization and repository Atom feeds."""

    hosts = ("github.com", "www.github.com")
    excluded_paths = (
        "settings", "explore", "topics", "trending", "collections", "events", "sponsors",
        "about", "pricing", "search", "marketplace", "features", "enterprise", "team",
        "login", "signup", "join", "notifications", "new", "organizations", "orgs",
        "codespaces", "pulls", "issues", "apps",
    )  # fmt: skip

    def match(self, url: str) -> bool:
        return is_any_of(_hostname(url), self.hosts)

    def resolve(self, url: str, context: PlatformContext) -> list[str]:
        path = urlsplit(url).path
        user_match = re.match(r"^/([^/]+)/?$", path)
        if user_match:
            user = user_match.group(1)
            if is_any_of(user, self.excluded_paths):
                return []
            return [f"https://github.com/{user}.atom"]

        repo_match = re.match(r"^/([^/]+)/([^/]+)", path)
        if not repo_match or is_any_of(repo_match.group(1), self.excluded_paths):
            return []
        base = f"https://github.com/{repo_match.group(1)}/{repo_match.group(2)}"
        uris = [f"{base}/releases.atom", f"{base}/commits.atom", f"{base}/tags.atom"]
        if "/wiki" in path:
            uris.append(f"{base}/wiki.atom")
        if "/discussions" in path:
            uris.append(f"{base}/discussions.atom")
        branch_match = re.match(r"^/[^/]+/[^/]+/tree/([^/]+)", path)
        if branch_match:
            uris.append(f"{base}/commits/{branch_match.group(1)}.atom")
        return uris


class RedditHandler:
    hosts = ("reddit.com", "www.reddit.com", "old.reddit.com", "new.reddit.com")

    def match(self, url: str) -> bool:
        return is_any_of(_hostname(url), self.hosts)

    def resolve(self, url: str, context: PlatformContext) -> list[str]:
        path = urlsplit(url).path
        subreddit_match = re.match(r"^/r/([^/]+)", path)
        if subreddit_match:
            return [f"https://www.reddit.com/r/{subreddit_match.group(1)}/.rss"]
        user_match = re.match(r"^/(?:u|user)/([^/]+)", path)
        if user_match:
            return [f"https://www.reddit.com/user/{user_match.group(1)}/.rss"]
        return []


class YoutubeHandler:
    """Channel and playlist feeds.

    Handle (``/@name``), legacy user and custom URLs do not carry the channel
    id, so it is read from the page content. When no content was supplied the
    page is fetched once through the context's fetcher.
    """

    hosts = ("youtube.com", "www.youtube.com", "m.youtube.com")
    feed_url = "https://www.youtube.com/feeds/videos.xml"
    channel_id_pattern = re.compile(r'"channelId":"(UC[a-zA-Z0-9_-]+)"')
    indirect_path_pattern = re.compile(r"^/(?:@|user/|c/)[^/]+")

    def match(self, url: str) -> bool:
        return is_any_of(_hostname(url), self.hosts)

    def _channel_feeds(self, channel_id: str) -> list[str]:
        # UULF playlists hold regular uploads only, without shorts.
        videos_only = "UULF" + channel_id[len("UC") :]
        return [
            f"{self.feed_url}?channel_id={channel_id}",
            f"{self.feed_url}?playlist_id={videos_only}",
        ]

    def resolve(self, url: str, context: PlatformContext) -> list[str]:
        parsed = urlsplit(url)
        uris: list[str] = []

        channel_match = re.match(r"^/channel/(UC[a-zA-Z0-9_-]+)", parsed.path)
        if channel_match:
            uris.extend(self._channel_feeds(channel_match.group(1)))

        for playlist_id in parse_qs(parsed.query).get("list", [])[:1]:
            uris.append(f"{self.feed_url}?playlist_id={playlist_id}")

        if uris or not self.indirect_path_pattern.match(parsed.path):
            return uris

        content = context.content
        if not content and context.fetcher is not None:
            content = context.fetcher.fetch(url).text
        id_match = self.channel_id_pattern.search(content or "")
        if id_match:
            uris.extend(self._channel_feeds(id_match.group(1)))
        return uris


class DeviantartHandler:
    hosts = ("deviantart.com", "www.deviantart.com")
    feed_url = "https://backend.deviantart.com/rss.xml"
    system_paths = (
        "about", "join", "search", "tag", "topic", "watch", "notifications", "settings",
        "submit", "shop", "core-membership", "team", "developers",
    )  # fmt: skip

    def match(self, url: str) -> bool:
        return is_any_of(_hostname(url), self.hosts)

    def resolve(self, url: str, context: PlatformContext) -> list[str]:
        user_match = re.match(r"^/([a-zA-Z0-9_-]+)(?:/gallery)?(?:/|$)", urlsplit(url).path)
        if not user_match or is_any_of(user_match.group(1), self.system_paths):
            return []
        query = quote(f"by:{user_match.group(1)} sort:time meta:all", safe="")
        return [f"{self.feed_url}?type=deviation&q={query}"]


class BlogspotHandler:
    # *.blogspot.com plus country domains such as blogspot.co.uk or blogspot.de.
    domain_pattern = re.compile(r"^.+\.blogspot\.(?:com|co\.[a-z]{2}|com\.[a-z]{2}|[a-z]{2,3})$")

    def match(self, url: str) -> bool:
        return bool(self.domain_pattern.match(_hostname(url)))

    def resolve(self, url: str, context: PlatformContext) -> list[str]:
        origin = _origin(url)
        return [f"{origin}/feeds/posts/default", f"{origin}/feeds/posts/default?alt=rss"]


class MediumHandler:
    hosts = ("medium.com", "www.medium.com")
    skip_paths = ("tag", "search", "me", "new-story", "plans", "membership")

    def match(self, url: str) -> bool:
        hostname = _hostname(url)
        return hostname in self.hosts or hostname.endswith(".medium.com")

    def resolve(self, url: str, context: PlatformContext) -> list[str]:
        hostname = _hostname(url)
        path = urlsplit(url).path
        if hostname in self.hosts:
            user_match = re.match(r"^/@([^/]+)", path)
            if user_match:
                return [f"https://medium.com/feed/@{user_match.group(1)}"]
            publication_match = re.match(r"^/([^/@][^/]+)", path)
            if publication_match and not is_any_of(publication_match.group(1), self.skip_paths):
                return [f"https://medium.com/feed/{publication_match.group(1)}"]
            return []
        subdomain = hostname[: -len(".medium.com")]
        return [f"https://medium.com/feed/{subdomain}"]


class SubstackHandler:
    def match(self, url: str) -> bool:
        return _hostname(url).endswith(".substack.com")

    def resolve(self, url: str, context: PlatformContext) -> list[str]:
        return [f"{_origin(url)}/feed"]


class WordpressHandler:
    """Blog, category, tag and author feeds of sites hosted on wordpress.com."""

    archive_pattern = re.compile(r"^/(category|tag|author)/([^/]+)")

    def match(self, url: str) -> bool:
        return _hostname(url).endswith(".wordpress.com")

    def resolve(self, url: str, context: PlatformContext) -> list[str]:
        origin = _origin(url)
        uris: list[str] = []
        archive_match = self.archive_pattern.match(urlsplit(url).path)
        if archive_match:
            uris.append(f"{origin}/{archive_match.group(1)}/{archive_match.group(2)}/feed/")
        uris.extend(
            f"{origin}{path}"
            for path in ("/feed/", "/feed/rss2/", "/feed/rdf/", "/feed/atom/", "/comments/feed/")
        )
        return uris


class MastodonHandler:
    """Profile and hashtag feeds on known or conventionally named instances."""

    known_instances = (
        "mastodon.social", "mastodon.online", "mastodon.world", "mstdn.social", "mas.to",
        "universeodon.com", "c.im", "social.vivaldi.net", "masto.ai", "mastodon.cloud",
        "fosstodon.org", "hachyderm.io", "infosec.exchange", "techhub.social", "phpc.social",
        "ruby.social", "functional.cafe", "toot.cafe", "mathstodon.xyz", "aus.social",
        "nrw.social", "chaos.social", "social.tchncs.de", "piaille.fr", "mamot.fr",
        "social.coop", "wandering.shop", "tabletop.social", "metalhead.club", "mindly.social",
        "pixelfed.social", "kolektiva.social",
    )  # fmt: skip
    instance_prefixes = ("mastodon.", "mstdn.", "social.", "toot.")

    def match(self, url: str) -> bool:
        hostname = _hostname(url)
        if hostname not in self.known_instances and not hostname.startswith(
            self.instance_prefixes
        ):
            return False
        path = urlsplit(url).path
        return path.startswith("/@") or path.startswith("/tags/")

    def resolve(self, url: str, context: PlatformContext) -> list[str]:
        origin = _origin(url)
        path = urlsplit(url).path
        user_match = re.match(r"^/@([^/]+)", path)
        if user_match:
            return [f"{origin}/@{user_match.group(1)}.rss"]
        tag_match = re.match(r"^/tags/([^/]+)", path)
        if tag_match:
            return [f"{origin}/tags/{tag_match.group(1)}.rss"]
        return []


github_handler = GithubHandler()
reddit_handler = RedditHandler()
youtube_handler = YoutubeHandler()
deviantart_handler = DeviantartHandler()
blogspot_handler = BlogspotHandler()
medium_handler = MediumHandler()
substack_handler = SubstackHandler()
wordpress_handler = WordpressHandler()
mastodon_handler = MastodonHandler()

DEFAULT_PLATFORM_HANDLERS = (
    deviantart_handler,
    github_handler,
    reddit_handler,
    youtube_handler,
    blogspot_handler,
    medium_handler,
    substack_handler,
    wordpress_handler,
    mastodon_handler,
)
