"""Scene forest -> GLB export entry point.

``export_scene`` never raises for expected failures: malformed forests and
I/O errors are reported through the logger callback at severity 2 and
signalled by a ``False`` return.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Iterable, TextIO

from sceneglb.core.logging import LEVEL_ERROR, LoggerCallback
from sceneglb.core.scene import Group

from ._context import ExportContext
from ._document import build_document
from ._glb_writer import GlbWriter
from ._staging import Payload
from ._walker import DEFAULT_MAX_DEPTH, SceneStructureError, SceneWalker

logger = logging.getLogger(__name__)


def export_scene(
    store: Iterable[Group],
    log: LoggerCallback,
    path: Path | str,
    *,
    include_attributes: bool = True,
    payloads: Iterable[Payload] = (),
    max_depth: int = DEFAULT_MAX_DEPTH,
    dump_json: TextIO | None = None,
    atomic: bool = False,
) -> bool:
    """Export a File -> Model -> Group forest to a GLB file at ``path``.

    Args:
        store: SceneStore (or any iterable of FILE roots).
        log: Callback ``(level, fmt, *args)``; receives every failure at level 2.
        path: Destination file.
        include_attributes: Emit group attributes as node ``extras``.
        payloads: Byte buffers staged into the BIN chunk in order. ``bytes``
            are referenced; mutable buffers and arrays are copied.
        max_depth: Group nesting limit before the forest is rejected.
        dump_json: If given, the document is pretty-printed here too.
        atomic: Write to ``<path>.tmp`` and rename into place on success.

    Returns:
        True when the container was completely written.
    """
    path = Path(path)
    ctx = ExportContext(include_attributes=include_attributes)

    try:
        root_nodes = SceneWalker(ctx, max_depth=max_depth).walk(store)
    except (SceneStructureError, RecursionError) as exc:
        log(LEVEL_ERROR, "%s: Invalid scene structure: %s", path, exc)
        return False

    for data in payloads:
        ctx.add_data(data, own_copy=not isinstance(data, bytes))

    document = build_document(ctx, root_nodes)

    target = path.with_name(path.name + ".tmp") if atomic else path
    writer = GlbWriter(target, log)
    if not writer.write(document, ctx.staging):
        if atomic:
            target.unlink(missing_ok=True)
        return False

    if atomic:
        try:
            os.replace(target, path)
        except OSError as exc:
            log(LEVEL_ERROR, "Failed to move %s to %s: %s", target, path, exc.strerror or exc)
            target.unlink(missing_ok=True)
            return False

    if dump_json is not None:
        json.dump(document, dump_json, indent=2, ensure_ascii=False)
        dump_json.write("\n")
        dump_json.flush()

    logger.info(
        f"GLB exported: {path} ({writer.bytes_written} bytes, "
        f"{len(ctx.nodes)} nodes, {len(root_nodes)} roots, {ctx.data_bytes} payload bytes)"
    )
    return True
