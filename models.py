from extensions import db
from datetime import datetime
from sqlalchemy import JSON

# Custom JSON type that uses JSONB on PostgreSQL and JSON/Text on SQLite
class SafeJSON(db.TypeDecorator):
    impl = JSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            from sqlalchemy.dialects.postgresql import JSONB
            return dialect.type_descriptor(JSONB())
        else:
            return dialect.type_descriptor(JSON())


class KeyValueRecord(db.Model):
    """One record of a key-value collection (one collection per REST resource)"""
    __tablename__ = 'key_value'
    collection = db.Column(db.String(128), primary_key=True)
    id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    value = db.Column(SafeJSON, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class File(db.Model):
    __tablename__ = 'files'
    id = db.Column(db.Integer, primary_key=True)
    uri = db.Column(db.String(500), nullable=False)  # public://..., https://..., or site-relative
    filename = db.Column(db.String(255))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)


class Node(db.Model):
    __tablename__ = 'nodes'
    BANNER_SLOTS = ('banner_1', 'banner_2', 'banner_3')

    id = db.Column(db.Integer, primary_key=True)
    type = db.Column(db.String(64), default='page')  # page, news
    title = db.Column(db.String(255), nullable=False)
    body = db.Column(SafeJSON, default=list)  # [{value, format}, ...]
    banner_1_id = db.Column(db.Integer, db.ForeignKey('files.id'))
    banner_2_id = db.Column(db.Integer, db.ForeignKey('files.id'))
    banner_3_id = db.Column(db.Integer, db.ForeignKey('files.id'))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    banner_1 = db.relationship('File', foreign_keys=[banner_1_id], lazy=True)
    banner_2 = db.relationship('File', foreign_keys=[banner_2_id], lazy=True)
    banner_3 = db.relationship('File', foreign_keys=[banner_3_id], lazy=True)
    news_references = db.relationship(
        'NodeNewsReference',
        foreign_keys='NodeNewsReference.node_id',
        order_by='NodeNewsReference.delta',
        cascade='all, delete-orphan',
        lazy=True)

    @property
    def news_ids(self):
        return [ref.target_id for ref in self.news_references]

    def get_banner(self, slot):
        """Return the File in a banner slot, or None when the slot is empty"""
        if slot not in self.BANNER_SLOTS:
            return None
        return getattr(self, slot)


class NodeNewsReference(db.Model):
    """Ordered reference from a node to a news node; the target may no longer exist"""
    __tablename__ = 'node_news'
    node_id = db.Column(db.Integer, db.ForeignKey('nodes.id'), primary_key=True)
    delta = db.Column(db.Integer, primary_key=True, autoincrement=False)
    target_id = db.Column(db.Integer, nullable=False)


class PathAlias(db.Model):
    __tablename__ = 'path_aliases'
    id = db.Column(db.Integer, primary_key=True)
    path = db.Column(db.String(255), nullable=False)  # /node/<id>
    alias = db.Column(db.String(255), nullable=False)  # /<segment>
    langcode = db.Column(db.String(12), default='en')

    __table_args__ = (
        db.Index('idx_path_alias_alias', 'alias'),
    )


class MenuLink(db.Model):
    __tablename__ = 'menu_links'
    id = db.Column(db.Integer, primary_key=True)
    menu_name = db.Column(db.String(128), nullable=False)
    title = db.Column(db.String(255), nullable=False)
    url = db.Column(db.String(500), nullable=False)
    parent_id = db.Column(db.Integer, db.ForeignKey('menu_links.id'))
    weight = db.Column(db.Integer, default=0)

    __table_args__ = (
        db.Index('idx_menu_link_menu', 'menu_name', 'weight'),
    )
