from .file_io import write_text_atomic, exclusive_lock

__all__ = ['write_text_atomic', 'exclusive_lock']
