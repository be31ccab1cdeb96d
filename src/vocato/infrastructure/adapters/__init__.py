# Infrastructure Adapters Package
from .key_value import JsonKeyValueStore
from .memory_store import InMemoryKeyValueStore, InMemoryWordStore
from .progress_store import KeyValueProgressStore
from .speech import CommandSpeechPlayer, NullSpeechPlayer
from .yaml_store import YamlWordStore

__all__ = [
    "YamlWordStore",
    "InMemoryWordStore",
    "JsonKeyValueStore",
    "InMemoryKeyValueStore",
    "KeyValueProgressStore",
    "CommandSpeechPlayer",
    "NullSpeechPlayer",
]
