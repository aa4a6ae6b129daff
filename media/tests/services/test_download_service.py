import pytest

from conftest import FakeResponse, FakeSession
from media.domain.errors import AllProvidersExhausted, InvalidRequest, MediaUnavailable
from media.services.download_service import DownloadService
from media.services.fallback_resolver import FallbackResolver
from media.services.url_normalizer import UrlNormalizer

TIKWM = "https://www.tikwm.com/api/"


def _service(session: FakeSession, registry) -> DownloadService:
    return DownloadService(UrlNormalizer(session), FallbackResolver(registry, session))


@pytest.mark.asyncio
async def test_should_trim_url_before_resolving(fake_session: FakeSession, registry):
    # GIVEN
    fake_session.route(TIKWM, FakeResponse({"data": {"music": "/m.mp3"}}))

    # WHEN
    media = await _service(fake_session, registry).download("  https://www.tiktok.com/@u/video/9  ", "audio")

    # THEN
    assert media.url == "https://www.tikwm.com/m.mp3"
    assert fake_session.calls[0]["data"]["url"] == "https://www.tiktok.com/@u/video/9"


@pytest.mark.asyncio
@pytest.mark.parametrize("url", [None, "", "  \n "])
async def test_should_reject_blank_url(fake_session: FakeSession, registry, url):
    with pytest.raises(InvalidRequest) as exc:
        await _service(fake_session, registry).download(url, "video")
    assert exc.value.message == "URL is required"


@pytest.mark.asyncio
async def test_should_treat_missing_media_type_as_video(fake_session: FakeSession, registry):
    fake_session.route(TIKWM, FakeResponse({"data": {"play": "/v.mp4"}}))
    media = await _service(fake_session, registry).download("https://www.tiktok.com/@u/video/9", None)
    assert media.type == "video"


def test_should_surface_unavailable_facet_without_trying_more_providers(fake_session: FakeSession, registry):
    # GIVEN: first provider succeeds, but without images
    fake_session.route(TIKWM, FakeResponse({"data": {"play": "/v.mp4"}}))

    # WHEN / THEN
    with pytest.raises(MediaUnavailable):
        _service(fake_session, registry).resolve_sync("https://www.tiktok.com/@u/video/9", "image")
    assert fake_session.urls() == [TIKWM]


def test_should_surface_exhaustion(fake_session: FakeSession, registry):
    with pytest.raises(AllProvidersExhausted):
        _service(fake_session, registry).resolve_sync("https://www.tiktok.com/@u/video/9", "video")
    assert len(fake_session.calls) == len(registry)
