from neurospark.io.encoder import encode_video, write_frames

__all__ = ["encode_video", "write_frames"]
