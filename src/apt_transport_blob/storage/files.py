"""Local file-system writer for downloaded blobs."""

import aiofiles


class LocalFileWriter:
    """Writes content to a path, replacing any existing file."""

    async def write(self, path: str, data: bytes) -> None:
        async with aiofiles.open(path, "wb") as f:
            await f.write(data)
