import re
from sqlalchemy.orm import Session, selectinload
from sqlalchemy import desc
from models.post import Post
from schemas.post_schema import PostCreate, PostUpdate

_WHITESPACE = re.compile(r"\s+")


def slugify(title: str) -> str:
    return _WHITESPACE.sub("-", title).lower()


def get_post(db: Session, post_id: str):
    return db.query(Post).filter(Post.id == post_id).first()


def get_post_by_slug(db: Session, slug: str):
    return db.query(Post).options(selectinload(Post.author)).filter(Post.slug == slug).first()


def slug_taken(db: Session, slug: str, exclude_post_id: str | None = None) -> bool:
    q = db.query(Post.id).filter(Post.slug == slug)
    if exclude_post_id:
        q = q.filter(Post.id != exclude_post_id)
    return q.first() is not None


def list_posts(db: Session, author_id: str | None = None, skip: int = 0, limit: int = 100):
    q = db.query(Post)
    if author_id:
        q = q.filter(Post.author_id == author_id)
    return q.order_by(desc(Post.created_at)).offset(skip).limit(limit).all()


def create_post(db: Session, payload: PostCreate, slug: str, author_id: str, image: str, image_ref: str):
    post = Post(
        author_id=author_id,
        title=payload.title,
        slug=slug,
        content=payload.content,
        tags=payload.tags,
        image=image,
        image_ref=image_ref,
    )
    db.add(post)
    db.commit()
    db.refresh(post)
    return post


def update_post(db: Session, post: Post, payload: PostUpdate, slug: str, image: str | None = None, image_ref: str | None = None):
    post.title = payload.title
    post.slug = slug
    post.content = payload.content
    post.tags = payload.tags
    if image_ref is not None:
        post.image = image
        post.image_ref = image_ref
    db.commit()
    db.refresh(post)
    return post


def delete_post(db: Session, post: Post) -> None:
    db.delete(post)
    db.commit()
