from designhub.dialogs.api_client import APIClient, APIError, CommunityAPI, ImageFile, ReviewAPI
from designhub.dialogs.base import GENERIC_RETRY_MESSAGE, BaseDialog
from designhub.dialogs.notifications import Toast, Toaster
from designhub.dialogs.share_work import ShareWorkDialog
from designhub.dialogs.write_review import WriteReviewDialog

__all__ = [
	"APIClient",
	"APIError",
	"CommunityAPI",
	"ImageFile",
	"ReviewAPI",
	"GENERIC_RETRY_MESSAGE",
	"BaseDialog",
	"Toast",
	"Toaster",
	"ShareWorkDialog",
	"WriteReviewDialog",
]
