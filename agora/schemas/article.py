import datetime as dt

from pydantic import BaseModel


class AuthorOut(BaseModel):
    id: int
    name: str
    url: str = ""
    intro: str = ""
    status: str


class ParticipantOut(BaseModel):
    participant_name: str
    participant_thumbnail_url: str
    participant_thumbnail_update_time: int
    participant_url: str
    comment_id: int


class ArticleOut(BaseModel):
    id: int
    title: str
    title_emoji: str | None = None
    content: str | None = None
    type: str | None = None
    status: str | None = None
    tags: str = ""
    city: str = ""
    permalink: str = ""
    create_time: dt.datetime | None = None
    update_time: dt.datetime | None = None
    latest_cmt_time: dt.datetime | None = None
    time_ago: str | None = None
    comment_count: int = 0
    view_count: int = 0
    view_count_display: str | None = None
    good_count: int = 0
    reward_point: int = 0
    reward_content: str = ""
    reddit_score: float = 0.0
    heat: int = 0
    author_name: str | None = None
    author_thumbnail_url: str | None = None
    author: AuthorOut | None = None
    participants: list[ParticipantOut] = []
    visibility: str | None = None
    discussion_viewable: bool | None = None


class PaginationOut(BaseModel):
    first_page_num: int | None = None
    last_page_num: int | None = None
    current_page_num: int
    page_count: int
    page_nums: list[int] = []


class ArticleListOut(BaseModel):
    items: list[ArticleOut]
    pagination: PaginationOut | None = None


class ArticleLinkOut(BaseModel):
    id: int
    title: str
    permalink: str
    create_time: int


class StoryCommentOut(BaseModel):
    id: int
    body_html: str
    depth: int = 0
    user_display_name: str
    user_job: str
    vote_count: int = 0
    created_at: str
    user_portrait_url: str


class StoryOut(BaseModel):
    id: int
    title: str
    url: str
    user_display_name: str
    user_job: str
    comment_html: str
    comment_count: int
    vote_count: int
    created_at: str
    user_portrait_url: str
    comments: list[StoryCommentOut] = []
    badge: str = ""
    participants: list[ParticipantOut] = []
