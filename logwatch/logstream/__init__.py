from .sink import LoggerSink, LogSink, MemorySink

__all__ = ["LogSink", "LoggerSink", "MemorySink"]
