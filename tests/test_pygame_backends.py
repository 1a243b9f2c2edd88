import logging

import pygame
import pytest

from frogger.assets import (
    AssetKind,
    AssetLoader,
    AssetLoadError,
    AssetRequest,
    build_manifest,
)
from frogger.config import GameConfig
from frogger.overlay import BUTTON_TARGET, MUTE_TARGET, PygameOverlay
from frogger.render import DrawImage, PygameRenderer


@pytest.fixture(scope="module", autouse=True)
def fonts():
    pygame.font.init()
    yield
    pygame.font.quit()


def test_manifest_covers_every_asset():
    manifest = build_manifest(GameConfig.from_dict())
    keys = {(request.kind, request.key) for request in manifest}
    assert (AssetKind.IMAGE, "characterImage") in keys
    assert (AssetKind.SOUND, "dieSound") in keys
    assert (AssetKind.FONT, "gameFont") in keys
    assert len(manifest) == 11


def test_loader_builds_colour_blocks_and_silence(tmp_path):
    path = tmp_path / "enemy.png"
    source = pygame.Surface((4, 3))
    source.fill((1, 2, 3))
    pygame.image.save(source, str(path))

    progress = []
    bundle = AssetLoader().load(
        [
            AssetRequest(AssetKind.IMAGE, "topImage", "#ff0000"),
            AssetRequest(AssetKind.IMAGE, "enemyImage", str(path)),
            AssetRequest(AssetKind.SOUND, "dieSound", ""),
        ],
        on_progress=progress.append,
    )

    assert bundle.image["topImage"].get_at((0, 0))[:3] == (255, 0, 0)
    assert bundle.image["enemyImage"].get_size() == (4, 3)
    assert bundle.sound["dieSound"] is None
    assert progress == [33, 66, 100]


def test_loader_reports_missing_file(tmp_path):
    missing = tmp_path / "nope.png"
    with pytest.raises(AssetLoadError) as info:
        AssetLoader().load([AssetRequest(AssetKind.IMAGE, "enemyImage", str(missing))])
    assert info.value.key == "enemyImage"
    assert info.value.kind == AssetKind.IMAGE


def test_loader_requires_image_source():
    with pytest.raises(AssetLoadError):
        AssetLoader().load([AssetRequest(AssetKind.IMAGE, "topImage", "")])


def test_renderer_scales_images():
    surface = pygame.Surface((100, 100))
    red = pygame.Surface((1, 1))
    red.fill((255, 0, 0))

    PygameRenderer(surface, {"a": red}).draw([DrawImage("a", 10, 10, 20, 20)])

    assert surface.get_at((15, 15))[:3] == (255, 0, 0)
    assert surface.get_at((50, 50))[:3] == (0, 0, 0)


def test_renderer_skips_missing_image(caplog):
    surface = pygame.Surface((10, 10))
    renderer = PygameRenderer(surface, {})
    with caplog.at_level(logging.ERROR, logger="frogger"):
        renderer.draw([DrawImage("ghost", 0, 0, 5, 5)])
    assert "ghost" in caplog.text


def test_overlay_hit_test_after_draw():
    overlay = PygameOverlay()
    overlay.set_font(pygame.font.Font(None, 24))
    surface = pygame.Surface((400, 300))

    overlay.show_button("Start")
    overlay.draw(surface)
    assert overlay.hit_test((200, 150)) == BUTTON_TARGET
    assert overlay.hit_test((385, 15)) == MUTE_TARGET
    assert overlay.hit_test((5, 290)) is None

    overlay.hide_button()
    overlay.draw(surface)
    assert overlay.hit_test((200, 150)) is None


def test_overlay_reset_hides_everything():
    overlay = PygameOverlay()
    overlay.show_banner("Frogger")
    overlay.show_stats()
    overlay.set_instructions(desktop="arrows", mobile="tap")

    overlay.reset()

    assert not overlay.banner_active
    assert not overlay.stats_active
    assert not overlay.instructions_active
