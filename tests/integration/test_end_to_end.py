from pathlib import Path

from tilecache.caches.disk import DiskCache
from tilecache.config.loader import compile_config
from tilecache.imaging.formats import PNGFormat, PNGQuantizedFormat
from tilecache.sources.wms import WMSSource


DOCUMENT = """<?xml version="1.0"?>
<tilecache>
  <format name="PNG" type="PNG"/>
  <cache name="diskcache" type="disk"/>
  <source name="wms1" type="wms">
    <srs>EPSG:4326</srs>
  </source>
  <tileset name="t1">
    <cache>diskcache</cache>
    <source>wms1</source>
    <srs>EPSG:4326</srs>
    <size>256 256</size>
    <extent>-180 -90 180 90</extent>
    <resolutions>1 2 4 8</resolutions>
  </tileset>
  <services>
    <wms/>
  </services>
  <lock_dir>{lock_dir}</lock_dir>
</tilecache>
"""


def test_full_document_compiles_into_registries(tmp_path: Path) -> None:
    path = tmp_path / "tilecache.xml"
    lock_dir = tmp_path / "locks"
    path.write_text(DOCUMENT.format(lock_dir=lock_dir), encoding="utf-8")

    config = compile_config(path)

    assert set(config.sources) == {"wms1"}
    assert set(config.caches) == {"diskcache"}
    assert set(config.tilesets) == {"t1"}
    assert set(config.image_formats) == {"PNG", "PNG8", "JPEG"}

    source = config.get_source("wms1")
    assert isinstance(source, WMSSource)
    assert source.srs == "EPSG:4326"
    assert isinstance(config.get_cache("diskcache"), DiskCache)

    png = config.get_image_format("PNG")
    assert type(png) is PNGFormat
    assert isinstance(config.get_image_format("PNG8"), PNGQuantizedFormat)

    tileset = config.get_tileset("t1")
    assert tileset.levels == 4
    assert tileset.format is None
    assert tileset.cache is config.get_cache("diskcache")
    assert tileset.source is source
    assert (tileset.tile_sx, tileset.tile_sy) == (256, 256)
    assert tileset.extent == (-180.0, -90.0, 180.0, 90.0)
    assert tileset.resolutions == (1.0, 2.0, 4.0, 8.0)

    assert config.services == frozenset({"wms"})
    assert config.lock_dir == str(lock_dir)
    assert lock_dir.is_dir()
    assert not (lock_dir / "test.lock").exists()
