from .mocks import FakeAdvertisementSource, build_frame, create_test_frames

__all__ = ["FakeAdvertisementSource", "build_frame", "create_test_frames"]
