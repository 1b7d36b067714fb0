from conftest import CHROME, EDGE, FIREFOX, SAFARI, CountingConfig

from ableplayer_media.backend.common.types import EmbedOptions
from ableplayer_media.backend.host.page import JQUERY_PATH, Page
from ableplayer_media.backend.host.useragent import UserAgent
from ableplayer_media.backend.player.ableplayer import AblePlayerPlugin
from ableplayer_media.backend.player.markup import LINKPLACEHOLDER


def _plugin(config: CountingConfig, user_agent: str = "") -> AblePlayerPlugin:
    return AblePlayerPlugin(config, useragent=UserAgent(user_agent))


# ----------------------------------------------------------------------
# Supported extensions
# ----------------------------------------------------------------------
def test_supported_extensions_are_computed_once(config: CountingConfig) -> None:
    plugin = _plugin(config)
    first = plugin.get_supported_extensions()
    calls = config.calls
    config.values["videoextensions"] = ".mp4"
    second = plugin.get_supported_extensions()
    assert second is first
    assert config.calls == calls == 2


def test_default_configuration_intersects_with_playable_groups(config: CountingConfig) -> None:
    extensions = _plugin(config).get_supported_extensions()
    assert {".mp4", ".m4v", ".webm", ".ogv", ".mov", ".mp3", ".ogg", ".m3u8", ".mpd"} <= extensions
    # Configured, but not natively playable.
    assert ".flv" not in extensions
    assert ".f4v" not in extensions


def test_empty_configuration_supports_nothing() -> None:
    plugin = _plugin(CountingConfig(videoextensions="", audioextensions=None))
    assert plugin.get_supported_extensions() == set()
    assert plugin.list_supported_urls(["a.mp4", "b.mp3"]) == []


def test_unknown_tokens_resolve_to_nothing() -> None:
    plugin = _plugin(CountingConfig(videoextensions=" nonsense , .xyz ", audioextensions=""))
    assert plugin.get_supported_extensions() == set()


def test_configuration_is_case_and_space_insensitive() -> None:
    plugin = _plugin(CountingConfig(videoextensions="  .MP4 ,  .Webm", audioextensions=" .MP3"))
    assert plugin.get_supported_extensions() == {".mp4", ".webm", ".mp3"}


# ----------------------------------------------------------------------
# URL selection
# ----------------------------------------------------------------------
def test_list_supported_urls_preserves_order(config: CountingConfig) -> None:
    plugin = _plugin(config)
    assert plugin.list_supported_urls(["a.mp4", "b.ogv"]) == ["a.mp4", "b.ogv"]
    assert plugin.list_supported_urls(["b.ogv", "a.mp4"]) == ["b.ogv", "a.mp4"]


def test_list_supported_urls_drops_unconfigured_extensions() -> None:
    plugin = _plugin(CountingConfig(videoextensions=".mp4", audioextensions=""))
    urls = ["http://example.com/a.mp4", "http://example.com/b.webm", "http://example.com/c.flv"]
    assert plugin.list_supported_urls(urls) == ["http://example.com/a.mp4"]


def test_list_supported_urls_respects_client_capabilities(config: CountingConfig) -> None:
    urls = ["a.webm", "b.mp4", "c.ogg", "d.mov"]
    assert _plugin(config, SAFARI).list_supported_urls(urls) == ["b.mp4", "d.mov"]
    assert _plugin(config, FIREFOX).list_supported_urls(urls) == ["a.webm", "b.mp4", "c.ogg"]
    assert _plugin(config, CHROME).list_supported_urls(urls) == urls


def test_list_supported_urls_ignores_options(config: CountingConfig) -> None:
    plugin = _plugin(config)
    assert plugin.list_supported_urls(["a.mp4"], {"anything": True}) == ["a.mp4"]
    assert plugin.list_supported_urls([]) == []


# ----------------------------------------------------------------------
# Source ordering
# ----------------------------------------------------------------------
def test_mp4_sources_move_to_the_front(config: CountingConfig) -> None:
    context = _plugin(config).build_context(["a.ogv", "b.mp4", "c.webm"], "Clip", 0, 0)
    assert [s.type for s in context.arrsources] == ["video/mp4", "video/ogg", "video/webm"]
    assert [s.src for s in context.arrsources] == ["b.mp4", "a.ogv", "c.webm"]


def test_source_ordering_is_stable_within_each_class(config: CountingConfig) -> None:
    context = _plugin(config).build_context(["a.webm", "b.mp4", "c.ogv", "d.m4v"], "Clip", 0, 0)
    assert [s.src for s in context.arrsources] == ["b.mp4", "d.m4v", "a.webm", "c.ogv"]
    assert context.sources.splitlines() == [
        '<source src="b.mp4" type="video/mp4" />',
        '<source src="d.m4v" type="video/mp4" />',
        '<source src="a.webm" type="video/webm" />',
        '<source src="c.ogv" type="video/ogg" />',
    ]


def test_quicktime_is_relabelled_for_chrome_and_edge(config: CountingConfig) -> None:
    for agent in (CHROME, EDGE):
        sources = _plugin(config, agent).build_sources(["a.webm", "b.mov"])
        assert [(s.src, s.type) for s in sources] == [("b.mov", "video/mp4"), ("a.webm", "video/webm")]


def test_quicktime_is_kept_for_other_clients(config: CountingConfig) -> None:
    for agent in (SAFARI, FIREFOX, ""):
        sources = _plugin(config, agent).build_sources(["b.mov"])
        assert sources[0].type == "video/quicktime"


def test_unknown_mimetype_passes_through(config: CountingConfig) -> None:
    sources = _plugin(config).build_sources(["http://example.com/stream"])
    assert sources[0].type == "document/unknown"


# ----------------------------------------------------------------------
# Original markup
# ----------------------------------------------------------------------
def test_tracks_are_extracted_from_original_markup(config: CountingConfig) -> None:
    text = "<video><track kind=captions src=a.vtt></video>"
    context = _plugin(config).build_context(["a.mp4"], "Clip", 0, 0, {"originaltext": text})
    assert context.hastracks is True
    assert context.arrtracks == ["<track kind=captions src=a.vtt>"]
    assert context.tracks == "<track kind=captions src=a.vtt>"
    assert context.text == text
    assert context.isaudio is False


def test_multiple_tracks_keep_their_order(config: CountingConfig) -> None:
    text = (
        '<audio controls><source src="a.mp3">'
        '<track kind="captions" srclang="en" src="en.vtt">'
        '<track kind="descriptions" srclang="fr" src="fr.vtt"></audio>'
    )
    context = _plugin(config).build_context(["a.mp3"], "Clip", 0, 0, EmbedOptions(original_text=text))
    assert context.isaudio is True
    assert context.arrtracks == [
        '<track kind="captions" srclang="en" src="en.vtt">',
        '<track kind="descriptions" srclang="fr" src="fr.vtt">',
    ]
    assert context.tracks.count("\n") == 1


def test_poster_is_detected(config: CountingConfig) -> None:
    text = '<video poster="poster.jpg?a=1&amp;b=2" controls><source src="a.mp4"></video>'
    context = _plugin(config).build_context(["a.mp4"], "Clip", 0, 0, {"originaltext": text})
    assert context.hasposter is True
    assert context.poster == "poster.jpg?a=1&b=2"
    assert context.hastracks is False


def test_missing_or_foreign_markup_uses_defaults(config: CountingConfig) -> None:
    plugin = _plugin(config)
    for options in (None, {}, {"originaltext": None}, {"originaltext": "<p><video></video></p>"}):
        context = plugin.build_context(["a.mp4"], "Clip", 0, 0, options)
        assert context.text is None
        assert context.isaudio is None
        assert context.hastracks is False
        assert context.hasposter is False
        assert context.arrtracks == []
        assert context.tracks == ""


def test_arbitrary_option_keys_are_tolerated(config: CountingConfig) -> None:
    text = "<video><track src=a></video>"
    options = {1: "y", None: 2, "has space": 3, "model_config": {}, "width": 640, "originaltext": text}
    plugin = _plugin(config)
    context = plugin.build_context(["a.mp4"], "x", 0, 0, options)
    assert context.arrtracks == ["<track src=a>"]
    assert "<track src=a>" in plugin.embed(["a.mp4"], "x", 0, 0, options)

    coerced = EmbedOptions.coerce(options)
    assert coerced.original_text == text
    assert coerced.model_extra == {"width": 640}
    assert EmbedOptions.coerce({"original_text": text}).original_text == text


# ----------------------------------------------------------------------
# Title, size and fallback
# ----------------------------------------------------------------------
def test_title_is_escaped_exactly_once(config: CountingConfig) -> None:
    plugin = _plugin(config)
    html = plugin.embed(["a.mp4"], "A & B > C", 0, 0, {})
    assert 'title="A &amp; B &gt; C"' in html
    assert "&amp;amp;" not in html
    assert plugin.build_context(["a.mp4"], "A &amp; B &gt; C", 0, 0).title == "A &amp; B &gt; C"


def test_title_falls_back_to_file_name(config: CountingConfig) -> None:
    context = _plugin(config).build_context(["http://example.com/media/My%20Clip.mp4"], None, 0, 0)
    assert context.title == "My Clip.mp4"


def test_default_width_is_used_and_height_omitted(config: CountingConfig) -> None:
    plugin = _plugin(config)
    assert plugin.build_context(["a.mp4"], "Clip", 0, 0).size == 'width="400"'
    assert plugin.build_context(["a.mp4"], "Clip", None, None).size == 'width="400"'
    assert plugin.build_context(["a.mp4"], "Clip", 0, 240).size == 'width="400" height="240"'
    assert plugin.build_context(["a.mp4"], "Clip", 640, 0).size == 'width="640"'


def test_fallback_is_always_the_link_placeholder(config: CountingConfig) -> None:
    plugin = _plugin(config)
    context = plugin.build_context(["a.mp4"], "Clip", 0, 0)
    assert context.fallback == LINKPLACEHOLDER
    assert LINKPLACEHOLDER in plugin.embed(["a.mp4"], "Clip", 0, 0)


def test_embed_without_urls_does_not_fail(config: CountingConfig) -> None:
    html = _plugin(config).embed([], None, 0, 0, None)
    assert "mediaplugin_ableplayer" in html
    assert "<source" not in html


def test_embed_renders_audio_and_video_elements(config: CountingConfig) -> None:
    plugin = _plugin(config)
    assert "<audio " in plugin.embed(["a.mp3", "a.ogg"], "Song", 0, 0)
    assert "<video " in plugin.embed(["a.mp4", "a.mp3"], "Clip", 0, 0)
    audio_text = "<audio><source src=a.mp4></audio>"
    assert "<audio " in plugin.embed(["a.mp4"], "Clip", 0, 0, {"originaltext": audio_text})


# ----------------------------------------------------------------------
# Host accessors
# ----------------------------------------------------------------------
def test_rank(config: CountingConfig) -> None:
    assert _plugin(config).get_rank() == 2000


def test_setup_registers_player_assets(config: CountingConfig) -> None:
    page = Page(wwwroot="https://lms.example.com")
    _plugin(config).setup(page)
    assert [s.url for s in page.requires.scripts] == [
        "https://lms.example.com" + JQUERY_PATH,
        "https://lms.example.com/media/player/ableplayer/build/ableplayer.min.js",
        "https://lms.example.com/media/player/ableplayer/thirdparty/js.cookie.min.js",
    ]
    assert all(s.in_head for s in page.requires.scripts)
    assert page.requires.styles == [
        "https://lms.example.com/media/player/ableplayer/build/ableplayer.min.css"
    ]


class RecordingRequirements:
    def __init__(self) -> None:
        self.calls = []

    def jquery(self) -> None:
        self.calls.append(("jquery",))

    def js(self, path: str, in_head: bool = False) -> None:
        self.calls.append(("js", path, in_head))

    def css(self, path: str) -> None:
        self.calls.append(("css", path))


class HostPage:
    def __init__(self) -> None:
        self.requires = RecordingRequirements()


def test_setup_talks_to_host_asset_requirements(config: CountingConfig) -> None:
    page = HostPage()
    _plugin(config).setup(page)
    assert page.requires.calls == [
        ("jquery",),
        ("js", "/media/player/ableplayer/build/ableplayer.min.js", True),
        ("js", "/media/player/ableplayer/thirdparty/js.cookie.min.js", True),
        ("css", "/media/player/ableplayer/build/ableplayer.min.css"),
    ]


def test_for_request_uses_stored_settings() -> None:
    plugin = AblePlayerPlugin.for_request(CHROME)
    assert ".mp4" in plugin.get_supported_extensions()
    assert plugin.build_sources(["a.mov"])[0].type == "video/mp4"
