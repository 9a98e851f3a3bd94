
from functools import lru_cache

from .local_taxonomy import LocalIndustryKnowledgeBase
from .provider import IndustryKnowledgeBase


@lru_cache(maxsize=1)
def get_default_knowledge_base() -> IndustryKnowledgeBase:
    return LocalIndustryKnowledgeBase()


__all__ = ["IndustryKnowledgeBase", "LocalIndustryKnowledgeBase", "get_default_knowledge_base"]
