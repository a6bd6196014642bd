"""
Forum API endpoints: categories, subforums, threads, posts and the
per-user state around them (reactions, bookmarks, subscriptions, private
messages, notifications).
"""
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status

from ..models import (
    Bookmark, BookmarkCreate,
    Category, CategoryCreate, CategoryUpdate,
    ErrorResponse,
    Notification, NotificationCreate,
    Post, PostCreate, PostUpdate,
    PrivateMessage, PrivateMessageCreate,
    Reaction, ReactionCreate,
    Subforum, SubforumCreate,
    Subscription, SubscriptionCreate,
    Thread, ThreadCreate, ThreadFilters, ThreadUpdate,
)
from ..storage import Storage
from ..dependencies import get_storage
from .responses import not_found

router = APIRouter(prefix="/forum", tags=["forum"])

StorageDep = Annotated[Storage, Depends(get_storage)]
UserIdQuery = Annotated[str, Query(alias="userId", min_length=1)]


# ============================================================================
# Categories and subforums
# ============================================================================


@router.get("/categories", response_model=list[Category])
async def list_categories(storage: StorageDep) -> list[Category]:
    return await storage.list_categories()


@router.post("/categories", response_model=Category, status_code=status.HTTP_201_CREATED)
async def create_category(request: CategoryCreate, storage: StorageDep) -> Category:
    return await storage.create_category(request)


@router.get(
    "/categories/{category_id}",
    response_model=Category,
    responses={404: {"model": ErrorResponse}},
)
async def get_category(category_id: int, storage: StorageDep) -> Category:
    category = await storage.get_category(category_id)
    if not category:
        raise not_found("Category", category_id)
    return category


@router.put(
    "/categories/{category_id}",
    response_model=Category,
    responses={404: {"model": ErrorResponse}},
)
async def update_category(
    category_id: int, request: CategoryUpdate, storage: StorageDep
) -> Category:
    return await storage.update_category(category_id, request)


@router.get("/subforums", response_model=list[Subforum])
async def list_subforums(
    storage: StorageDep,
    category_id: Annotated[Optional[int], Query(alias="categoryId")] = None,
) -> list[Subforum]:
    return await storage.list_subforums(category_id)


@router.post("/subforums", response_model=Subforum, status_code=status.HTTP_201_CREATED)
async def create_subforum(request: SubforumCreate, storage: StorageDep) -> Subforum:
    return await storage.create_subforum(request)


# ============================================================================
# Threads and posts
# ============================================================================


@router.get("/threads", response_model=list[Thread])
async def list_threads(
    storage: StorageDep,
    category_id: Annotated[Optional[int], Query(alias="categoryId")] = None,
    subforum_id: Annotated[Optional[int], Query(alias="subforumId")] = None,
    author_id: Annotated[Optional[str], Query(alias="authorId")] = None,
) -> list[Thread]:
    """List threads: sticky ones first, then by latest activity."""
    filters = ThreadFilters(
        category_id=category_id, subforum_id=subforum_id, author_id=author_id
    )
    return await storage.list_threads(filters)


@router.post("/threads", response_model=Thread, status_code=status.HTTP_201_CREATED)
async def create_thread(request: ThreadCreate, storage: StorageDep) -> Thread:
    return await storage.create_thread(request)


@router.get(
    "/threads/{thread_id}",
    response_model=Thread,
    responses={404: {"model": ErrorResponse}},
)
async def get_thread(thread_id: int, storage: StorageDep) -> Thread:
    thread = await storage.get_thread(thread_id)
    if not thread:
        raise not_found("Thread", thread_id)
    return thread


@router.put(
    "/threads/{thread_id}",
    response_model=Thread,
    responses={404: {"model": ErrorResponse}},
)
async def update_thread(thread_id: int, request: ThreadUpdate, storage: StorageDep) -> Thread:
    return await storage.update_thread(thread_id, request)


@router.delete("/threads/{thread_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_thread(thread_id: int, storage: StorageDep) -> None:
    """Delete a thread with its posts, reactions and bookmarks."""
    await storage.delete_thread(thread_id)


@router.post(
    "/threads/{thread_id}/view",
    response_model=Thread,
    responses={404: {"model": ErrorResponse}},
)
async def record_thread_view(thread_id: int, storage: StorageDep) -> Thread:
    return await storage.increment_thread_views(thread_id)


@router.get("/threads/{thread_id}/posts", response_model=list[Post])
async def list_posts(thread_id: int, storage: StorageDep) -> list[Post]:
    return await storage.list_posts(thread_id)


@router.post(
    "/posts",
    response_model=Post,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}},
)
async def create_post(request: PostCreate, storage: StorageDep) -> Post:
    """Reply to a thread. The thread's reply stats are refreshed."""
    return await storage.create_post(request)


@router.put(
    "/posts/{post_id}",
    response_model=Post,
    responses={404: {"model": ErrorResponse}},
)
async def update_post(post_id: int, request: PostUpdate, storage: StorageDep) -> Post:
    return await storage.update_post(post_id, request)


@router.delete("/posts/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(post_id: int, storage: StorageDep) -> None:
    await storage.delete_post(post_id)


# ============================================================================
# Reactions, bookmarks, subscriptions
# ============================================================================


@router.get("/reactions", response_model=list[Reaction])
async def list_reactions(
    storage: StorageDep,
    post_id: Annotated[Optional[int], Query(alias="postId")] = None,
    thread_id: Annotated[Optional[int], Query(alias="threadId")] = None,
) -> list[Reaction]:
    return await storage.list_reactions(post_id=post_id, thread_id=thread_id)


@router.post("/reactions", response_model=Reaction, status_code=status.HTTP_201_CREATED)
async def create_reaction(request: ReactionCreate, storage: StorageDep) -> Reaction:
    return await storage.create_reaction(request)


@router.delete("/reactions/{reaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_reaction(reaction_id: int, storage: StorageDep) -> None:
    await storage.delete_reaction(reaction_id)


@router.get("/bookmarks", response_model=list[Bookmark])
async def list_bookmarks(user_id: UserIdQuery, storage: StorageDep) -> list[Bookmark]:
    return await storage.list_user_bookmarks(user_id)


@router.post("/bookmarks", response_model=Bookmark, status_code=status.HTTP_201_CREATED)
async def create_bookmark(request: BookmarkCreate, storage: StorageDep) -> Bookmark:
    return await storage.create_bookmark(request)


@router.delete("/bookmarks/{bookmark_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_bookmark(bookmark_id: int, storage: StorageDep) -> None:
    await storage.delete_bookmark(bookmark_id)


@router.get("/subscriptions", response_model=list[Subscription])
async def list_subscriptions(
    user_id: UserIdQuery, storage: StorageDep
) -> list[Subscription]:
    return await storage.list_user_subscriptions(user_id)


@router.post(
    "/subscriptions", response_model=Subscription, status_code=status.HTTP_201_CREATED
)
async def create_subscription(
    request: SubscriptionCreate, storage: StorageDep
) -> Subscription:
    return await storage.create_subscription(request)


@router.delete("/subscriptions/{subscription_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_subscription(subscription_id: int, storage: StorageDep) -> None:
    await storage.delete_subscription(subscription_id)


# ============================================================================
# Private messages and notifications
# ============================================================================


@router.get("/messages", response_model=list[PrivateMessage])
async def list_messages(user_id: UserIdQuery, storage: StorageDep) -> list[PrivateMessage]:
    """Messages sent or received by the user, newest first."""
    return await storage.list_user_messages(user_id)


@router.post(
    "/messages", response_model=PrivateMessage, status_code=status.HTTP_201_CREATED
)
async def send_message(
    request: PrivateMessageCreate, storage: StorageDep
) -> PrivateMessage:
    return await storage.create_private_message(request)


@router.patch(
    "/messages/{message_id}/read",
    response_model=PrivateMessage,
    responses={404: {"model": ErrorResponse}},
)
async def mark_message_read(message_id: int, storage: StorageDep) -> PrivateMessage:
    return await storage.mark_message_read(message_id)


@router.get("/notifications", response_model=list[Notification])
async def list_notifications(
    user_id: UserIdQuery, storage: StorageDep
) -> list[Notification]:
    return await storage.list_user_notifications(user_id)


@router.post(
    "/notifications", response_model=Notification, status_code=status.HTTP_201_CREATED
)
async def create_notification(
    request: NotificationCreate, storage: StorageDep
) -> Notification:
    return await storage.create_notification(request)


@router.patch("/notifications/read-all", status_code=status.HTTP_204_NO_CONTENT)
async def mark_all_notifications_read(user_id: UserIdQuery, storage: StorageDep) -> None:
    await storage.mark_all_notifications_read(user_id)


@router.patch(
    "/notifications/{notification_id}/read",
    response_model=Notification,
    responses={404: {"model": ErrorResponse}},
)
async def mark_notification_read(
    notification_id: int, storage: StorageDep
) -> Notification:
    return await storage.mark_notification_read(notification_id)
