from dataclasses import dataclass, field
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional


# Specific service hostnames. Each entry wins over base-domain inference.
APP_NAME_MAPPINGS: Mapping[str, str] = MappingProxyType({
    # Google services, one group each
    "mail.google.com": "Gmail",
    "drive.google.com": "Drive",
    "docs.google.com": "Docs",
    "sheets.google.com": "Sheets",
    "slides.google.com": "Slides",
    "calendar.google.com": "Calendar",
    "meet.google.com": "Meet",
    "photos.google.com": "Photos",
    "maps.google.com": "Maps",
    "news.google.com": "Google News",
    "play.google.com": "Play Store",
    "youtube.com": "YouTube",
    "www.youtube.com": "YouTube",
    "music.youtube.com": "YouTube Music",
    "studio.youtube.com": "YouTube Studio",

    # Microsoft services
    "outlook.live.com": "Outlook",
    "outlook.office.com": "Outlook",
    "onedrive.live.com": "OneDrive",
    "teams.microsoft.com": "Teams",
    "office.com": "Office",

    # Amazon: AWS stays apart from shopping
    "console.aws.amazon.com": "AWS",
    "aws.amazon.com": "AWS",
    "s3.console.aws.amazon.com": "AWS",

    "gist.github.com": "GitHub Gist",

    "web.whatsapp.com": "WhatsApp",
    "web.telegram.org": "Telegram",
    "discord.com": "Discord",
    "app.slack.com": "Slack",
    "twitter.com": "Twitter",
    "x.com": "X",
    "linkedin.com": "LinkedIn",
    "www.linkedin.com": "LinkedIn",
    "facebook.com": "Facebook",
    "www.facebook.com": "Facebook",
    "instagram.com": "Instagram",
    "www.instagram.com": "Instagram",
    "reddit.com": "Reddit",
    "www.reddit.com": "Reddit",
    "netflix.com": "Netflix",
    "www.netflix.com": "Netflix",
    "open.spotify.com": "Spotify",
})

COMPOUND_PUBLIC_SUFFIXES: FrozenSet[str] = frozenset({"co.uk", "com.au", "co.jp", "com.br", "co.in"})


@dataclass(frozen=True)
class ClassificationRuleSet:
    """
    Static hostname -> group identity rules.
    Read-only and shared process-wide; never mutated at runtime.
    """
    mappings: Mapping[str, str] = field(default_factory=lambda: APP_NAME_MAPPINGS)
    compound_suffixes: FrozenSet[str] = COMPOUND_PUBLIC_SUFFIXES

    def lookup(self, hostname: str) -> Optional[str]:
        return self.mappings.get(hostname)

    @classmethod
    def default(cls) -> "ClassificationRuleSet":
        return DEFAULT_RULES

    @classmethod
    def from_mapping(cls, mappings: Mapping[str, str]) -> "ClassificationRuleSet":
        return cls(mappings=MappingProxyType(dict(mappings)))


DEFAULT_RULES = ClassificationRuleSet()
