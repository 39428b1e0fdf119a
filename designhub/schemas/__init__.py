from .user import (
	UserBase,
	UserCreate,
	UserUpdate,
	UserResponse,
	AuthorSummary,
	TokenResponse,
)
from .post import (
	Pagination,
	PostCreate,
	PostUpdate,
	PostResponse,
	PostListResponse,
	PostDetailResponse,
	PostLikeResponse,
	PostPinRequest,
	CommentCreate,
	CommentResponse,
	CommentListResponse,
	CommentLikeResponse,
	TrendingTag,
	TrendingTagsResponse,
)
from .review import (
	ReviewCreate,
	ReviewUpdate,
	ReviewResponse,
	ReviewEnvelope,
	ReviewListResponse,
	HelpfulVoteResponse,
)
from .product import (
	ProductCreate,
	ProductResponse,
	ProductListResponse,
)

__all__ = [
	"UserBase",
	"UserCreate",
	"UserUpdate",
	"UserResponse",
	"AuthorSummary",
	"TokenResponse",
	"Pagination",
	"PostCreate",
	"PostUpdate",
	"PostResponse",
	"PostListResponse",
	"PostDetailResponse",
	"PostLikeResponse",
	"PostPinRequest",
	"CommentCreate",
	"CommentResponse",
	"CommentListResponse",
	"CommentLikeResponse",
	"TrendingTag",
	"TrendingTagsResponse",
	"ReviewCreate",
	"ReviewUpdate",
	"ReviewResponse",
	"ReviewEnvelope",
	"ReviewListResponse",
	"HelpfulVoteResponse",
	"ProductCreate",
	"ProductResponse",
	"ProductListResponse",
]
