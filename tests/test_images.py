"""Unit tests for the image upload gate and the filesystem image store."""

import io

from listings.images.store import ImageStore
from listings.offers.config import OfferRules
from listings.offers.images import check_images
from listings.offers.models import ErrorKind, ImageKind, ImageRef, ImageUpload

RULES = OfferRules()


def upload(filename="user01.png", mimetype="image/png", content=b"\x89PNG") -> ImageUpload:
    return ImageUpload(filename=filename, mimetype=mimetype, file=io.BytesIO(content))


# ---------------------------------------------------------------------------
# Upload gate
# ---------------------------------------------------------------------------


class TestCheckImages:
    def test_no_images_is_valid(self):
        assert check_images(None, [], RULES) is None

    def test_image_avatar_and_previews(self):
        previews = [upload("a.jpg", "image/jpeg"), upload("b.gif", "image/gif")]
        assert check_images(upload(), previews, RULES) is None

    def test_mimetype_is_case_insensitive(self):
        assert check_images(upload(mimetype="IMAGE/PNG"), [], RULES) is None

    def test_bad_avatar(self):
        error = check_images(upload("style.css", "text/css"), [], RULES)
        assert error.kind == ErrorKind.IMAGES
        assert error.field_name == "images"

    def test_bad_preview(self):
        error = check_images(None, [upload(), upload("style.css", "text/css")], RULES)
        assert error.kind == ErrorKind.IMAGES

    def test_several_bad_files_share_one_error(self):
        error = check_images(
            upload("a.css", "text/css"), [upload("b.txt", "text/plain")], RULES
        )
        assert error is not None
        assert error.kind == ErrorKind.IMAGES

    def test_custom_mimetypes(self):
        rules = OfferRules(image_mimetypes=["image/png"])
        assert check_images(upload("a.jpg", "image/jpeg"), [], rules) is not None


# ---------------------------------------------------------------------------
# Image store
# ---------------------------------------------------------------------------


class TestImageStore:
    def test_store_writes_file(self, tmp_path):
        store = ImageStore(ImageKind.AVATARS, tmp_path)
        ref = store.store(upload(content=b"avatar-bytes"))
        assert ref.mimetype == "image/png"
        assert ref.name.endswith(".png")
        path = store.path_for(ref)
        assert path.parent == tmp_path / "avatars"
        assert path.read_bytes() == b"avatar-bytes"

    def test_names_are_unique(self, tmp_path):
        store = ImageStore(ImageKind.PREVIEWS, tmp_path)
        assert store.store(upload()).name != store.store(upload()).name

    def test_unsafe_suffix_dropped(self, tmp_path):
        store = ImageStore(ImageKind.PREVIEWS, tmp_path)
        ref = store.store(upload(filename="photo.p/ng"))
        assert "." not in ref.name

    def test_path_for_ignores_directories(self, tmp_path):
        store = ImageStore(ImageKind.AVATARS, tmp_path)
        path = store.path_for(ImageRef(name="../../etc/passwd", mimetype="image/png"))
        assert path == tmp_path / "avatars" / "passwd"

    def test_remove(self, tmp_path):
        store = ImageStore(ImageKind.AVATARS, tmp_path)
        ref = store.store(upload())
        store.remove(ref)
        assert not store.path_for(ref).exists()
        store.remove(ref)

    def test_root_from_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LISTINGS_IMAGES_DIR", str(tmp_path))
        store = ImageStore(ImageKind.PREVIEWS)
        assert store.directory == tmp_path / "previews"
