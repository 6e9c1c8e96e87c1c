from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.orm import Session

from core.assets import discard_asset, discard_on_error, store_upload
from core.auth import ensure_owner, get_current_user_id
from core.database import get_db
from core.errors import ConflictError, NotFoundError
from core.forms import parse_string_list, require_fields
from core.storage import AssetStore, get_asset_store
from crud.post_crud import (
    create_post,
    delete_post,
    get_post,
    get_post_by_slug,
    list_posts,
    slug_taken,
    slugify,
    update_post,
)
from schemas.envelope import Envelope, envelope
from schemas.post_schema import PostCreate, PostDetail, PostResponse, PostUpdate

router = APIRouter(prefix="/posts", tags=["Posts"])

SLUG_CONFLICT = "Slug is not unique"


@router.get("", response_model=Envelope[list[PostResponse]])
def list_all(skip: int = Query(0, ge=0), limit: int = Query(100, ge=1), db: Session = Depends(get_db)):
    posts = list_posts(db, skip=skip, limit=limit)
    return envelope("All Posts", [PostResponse.model_validate(p) for p in posts])


@router.get("/{slug}", response_model=Envelope[PostDetail])
def read_by_slug(slug: str, db: Session = Depends(get_db)):
    post = get_post_by_slug(db, slug)
    if not post:
        raise NotFoundError("Post not found")
    return envelope("Post Found", PostDetail.model_validate(post))


@router.post("", response_model=Envelope[PostResponse], status_code=201)
def create(
    title: str | None = Form(None),
    content: str | None = Form(None),
    tags: str | None = Form(None),
    file: UploadFile | None = File(None),
    db: Session = Depends(get_db),
    store: AssetStore = Depends(get_asset_store),
    user_id: str = Depends(get_current_user_id),
):
    require_fields(title, content, tags, file)
    payload = PostCreate(title=title, content=content, tags=parse_string_list(tags, "tags"))
    slug = slugify(payload.title)
    if slug_taken(db, slug):
        raise ConflictError(SLUG_CONFLICT)

    asset = store_upload(store, file, "posts", user_id)
    with discard_on_error(store, asset):
        post = create_post(db, payload, slug, user_id, image=asset.url, image_ref=asset.key)
    return envelope("Post created successfully", PostResponse.model_validate(post))


@router.patch("/{post_id}", response_model=Envelope[PostResponse])
def update(
    post_id: str,
    title: str | None = Form(None),
    content: str | None = Form(None),
    tags: str | None = Form(None),
    file: UploadFile | None = File(None),
    db: Session = Depends(get_db),
    store: AssetStore = Depends(get_asset_store),
    user_id: str = Depends(get_current_user_id),
):
    post = ensure_owner(get_post(db, post_id), user_id, "Post")
    require_fields(title, content, tags)
    payload = PostUpdate(title=title, content=content, tags=parse_string_list(tags, "tags"))

    slug = post.slug if payload.title == post.title else slugify(payload.title)
    if slug != post.slug and slug_taken(db, slug, exclude_post_id=post.id):
        raise ConflictError(SLUG_CONFLICT)

    if file is None:
        post = update_post(db, post, payload, slug)
        return envelope("Post updated successfully", PostResponse.model_validate(post))

    old_ref = post.image_ref
    asset = store_upload(store, file, "posts", user_id)
    with discard_on_error(store, asset):
        post = update_post(db, post, payload, slug, image=asset.url, image_ref=asset.key)
    discard_asset(store, old_ref)
    return envelope("Post updated successfully", PostResponse.model_validate(post))


@router.delete("/{post_id}", response_model=Envelope[PostResponse])
def delete(
    post_id: str,
    db: Session = Depends(get_db),
    store: AssetStore = Depends(get_asset_store),
    user_id: str = Depends(get_current_user_id),
):
    post = ensure_owner(get_post(db, post_id), user_id, "Post")
    deleted = PostResponse.model_validate(post)
    image_ref = post.image_ref
    delete_post(db, post)
    discard_asset(store, image_ref)
    return envelope("Post deleted successfully", deleted)
