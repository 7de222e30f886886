import errno
import contextlib
from typing import Protocol

FROM_BYTE = ord(";")
TO_BYTE = ord(":")

DEFAULT_CHUNK_SIZE = 0x10000
DEFAULT_BUFFER_SIZE = 0x2000

class SwapByteException(Exception):
    pass

class ByteSource(Protocol):
    def read(self, size: int = -1) -> bytes: ...

class ByteSink(Protocol):
    def write(self, data: bytes) -> int: ...
    def flush(self) -> None: ...

def check_byte(value):
    if not 0 <= value <= 0xFF:
        raise SwapByteException("byte value out of range: {}".format(value))
    return value

def write_all(sink, data):
    """
    sink: any ByteSink
    data: bytes-like
    keeps on writing until all data has been accepted (raw streams may
    perform short writes)
    """
    view = memoryview(data)
    while view:
        written = sink.write(view)
        if not written:
            raise OSError(errno.EIO,"failed to write whole buffer")
        view = view[written:]

class BufferedSink:
    """
    coalesces small writes into chunks of buffer_size before handing them
    to the wrapped sink. Big writes go straight through.
    """
    def __init__(self,inner : ByteSink,buffer_size=DEFAULT_BUFFER_SIZE):
        self.inner = inner
        self.buffer_size = buffer_size
        self.__buffer = bytearray()

    def write(self,data):
        if len(self.__buffer) + len(data) > self.buffer_size:
            self.__flush_buffer()
        if len(data) >= self.buffer_size:
            write_all(self.inner,data)
        else:
            self.__buffer += data
        return len(data)

    def flush(self):
        self.__flush_buffer()
        self.inner.flush()

    def release(self):
        """
        hands pending bytes to the wrapped sink without flushing it,
        used when the copy is aborted. Errors are ignored: the caller
        is already propagating one
        """
        with contextlib.suppress(OSError):
            self.__flush_buffer()

    def __flush_buffer(self):
        if self.__buffer:
            write_all(self.inner,self.__buffer)
            self.__buffer.clear()

class SwapByteWriter:
    """
    writer that swaps one byte for another

    each run without input_byte is written in one call, so this should
    wrap a BufferedSink as it can call inner.write several times per write
    """
    def __init__(self,inner : ByteSink,input_byte=FROM_BYTE,output_byte=TO_BYTE):
        self.inner = inner
        self.input_byte = check_byte(input_byte)
        self.output_byte = check_byte(output_byte)
        self.__replacement = bytes([output_byte])

    def write(self,data : bytes) -> int:
        start = 0
        while True:
            pos = data.find(self.input_byte,start)
            if pos == -1:
                break
            if pos > start:
                self.inner.write(data[start:pos])
            self.inner.write(self.__replacement)
            start = pos+1
        if start < len(data):
            self.inner.write(data[start:])

        # we don't change the amount of bytes, only which bytes are written
        return len(data)

    def flush(self):
        self.inner.flush()

def fixing_copy(source : ByteSource,sink : ByteSink,input_byte=FROM_BYTE,output_byte=TO_BYTE,
                chunk_size=DEFAULT_CHUNK_SIZE,buffer_size=DEFAULT_BUFFER_SIZE) -> int:
    """
    source: blocking readable stream, read until end of stream
    sink: writable stream, flushed once everything is copied
    returns: number of bytes copied

    I/O errors propagate as is. Whatever was already written to sink stays there,
    and on a read error the bytes already transformed are handed to sink too.
    """
    buffered = BufferedSink(sink,buffer_size)
    writer = SwapByteWriter(buffered,input_byte,output_byte)
    copied = 0
    while True:
        try:
            chunk = source.read(chunk_size)
            if chunk is None:
                # non-blocking source with no data available
                raise BlockingIOError(errno.EAGAIN,"source would block")
        except Exception:
            buffered.release()
            raise
        if not chunk:
            break
        copied += writer.write(chunk)

    writer.flush()
    return copied
