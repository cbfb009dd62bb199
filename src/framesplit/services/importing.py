"""Video import: permission check/request, picker or camera, file validation."""

from __future__ import annotations

import logging

from framesplit.adapters.base import (
    PermissionProvider,
    PermissionStatus,
    PermissionType,
    VideoFile,
    VideoPicker,
)
from framesplit.core.contracts import ValidationResult
from framesplit.core.errors import VideoImportError, VideoImportErrorCode
from framesplit.validation.video_file import blocking_errors, validate_video_file

logger = logging.getLogger(__name__)

_PERMISSION_LABELS = {
    PermissionType.PHOTO_LIBRARY: "Photo library",
    PermissionType.CAMERA: "Camera",
}


class VideoImportService:
    """Sequences permission handling, picking and validation of a source video."""

    def __init__(self, permissions: PermissionProvider, picker: VideoPicker):
        self.permissions = permissions
        self.picker = picker

    async def import_video_from_gallery(self) -> VideoFile:
        """Ask for photo library access, pick a video and validate it."""
        await self._ensure_permission(PermissionType.PHOTO_LIBRARY)
        video = await self._pick(from_camera=False)
        self.validate_video(video)
        logger.info(f"Imported {video.file_name} from gallery")
        return video

    async def import_video_from_camera(self) -> VideoFile:
        """Ask for camera access, record a video and validate it."""
        await self._ensure_permission(PermissionType.CAMERA)
        video = await self._pick(from_camera=True)
        self.validate_video(video)
        logger.info(f"Imported {video.file_name} from camera")
        return video

    def validate_video(self, file: VideoFile) -> None:
        """Raise INVALID_VIDEO for blocking problems; warnings alone pass."""
        validation = validate_video_file(file)
        if validation.valid:
            return

        for warning in validation.errors:
            if not warning.blocking:
                logger.warning(warning.message)

        errors = blocking_errors(validation.errors)
        if errors:
            raise VideoImportError(
                f"Invalid video file: {', '.join(e.message for e in errors)}",
                VideoImportErrorCode.INVALID_VIDEO,
                ValidationResult.failed(errors),
            )

    async def open_settings(self) -> None:
        """Open the OS settings so the user can unblock a permission."""
        await self.permissions.open_settings()

    # --- Private helper methods ---

    async def _ensure_permission(self, permission: PermissionType) -> None:
        status = await self.permissions.check(permission)
        if status is PermissionStatus.DENIED:
            status = await self.permissions.request(permission)

        label = _PERMISSION_LABELS[permission]
        if status is PermissionStatus.GRANTED:
            return
        if status is PermissionStatus.DENIED:
            raise VideoImportError(f"{label} permission denied", VideoImportErrorCode.PERMISSION_DENIED)
        if status is PermissionStatus.BLOCKED:
            raise VideoImportError(
                f"{label} permission blocked. Please enable in device settings.",
                VideoImportErrorCode.PERMISSION_BLOCKED,
            )
        raise VideoImportError(
            f"{label} permission unavailable on this device", VideoImportErrorCode.PERMISSION_UNAVAILABLE
        )

    async def _pick(self, from_camera: bool) -> VideoFile:
        action = "record" if from_camera else "pick"
        try:
            if from_camera:
                video = await self.picker.pick_video_from_camera()
            else:
                video = await self.picker.pick_video()
        except Exception as e:
            raise VideoImportError(f"Failed to {action} video: {e}", VideoImportErrorCode.PICKER_ERROR) from e

        if video is None:
            what = "recording" if from_camera else "selection"
            raise VideoImportError(f"Video {what} cancelled", VideoImportErrorCode.USER_CANCELLED)
        return video
