from typing import Optional
from urllib.parse import urlsplit

from neattabs.classification.domain.classification_rules import ClassificationRuleSet
from neattabs.classification.interfaces.address_classifier import AddressClassifier

WWW_PREFIX = "www."


def extract_hostname(address: Optional[str]) -> Optional[str]:
    """
    Hostname of an address, or None when it has no network location.
    """
    if not isinstance(address, str) or not address:
        return None
    try:
        hostname = urlsplit(address.strip()).hostname
    except ValueError:
        return None
    return hostname or None


def base_domain(hostname: str, compound_suffixes=None) -> str:
    if compound_suffixes is None:
        compound_suffixes = ClassificationRuleSet.default().compound_suffixes
    labels = hostname.split(".")
    if len(labels) < 2:
        return hostname
    if ".".join(labels[-2:]) in compound_suffixes and len(labels) >= 3:
        return ".".join(labels[-3:])
    return ".".join(labels[-2:])


class StandardAddressClassifier(AddressClassifier):
    """
    Rule-first classifier.
    Exact hostname mappings win; unmapped hosts are named after their base domain.
    """

    def __init__(self, rules: Optional[ClassificationRuleSet] = None):
        self.rules = rules or ClassificationRuleSet.default()

    def classify(self, address: str) -> Optional[str]:
        hostname = extract_hostname(address)
        if not hostname:
            return None

        # 1. Exact mapping
        identity = self.rules.lookup(hostname)
        if identity is not None:
            return identity

        # 2. Exact mapping without the www label
        if hostname.startswith(WWW_PREFIX):
            identity = self.rules.lookup(hostname[len(WWW_PREFIX):])
            if identity is not None:
                return identity

        # 3. Inferred from the base domain
        main_name = base_domain(hostname, self.rules.compound_suffixes).split(".")[0]
        if not main_name:
            return None
        return main_name[:1].upper() + main_name[1:]
