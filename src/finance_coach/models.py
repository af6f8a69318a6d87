"""
SQLAlchemy models for the finance coach ledger.

The analytics never write through these models; they only read a user's
snapshot of transactions, goals and subscription feedback.
"""
from datetime import datetime
from sqlalchemy import create_engine, Column, Integer, String, Float, Date, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import declarative_base, relationship, sessionmaker

from .config import DB_PATH

Base = declarative_base()


class User(Base):
    """Owner of a ledger."""
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False, default='Default User')
    created_at = Column(DateTime, default=datetime.utcnow)

    transactions = relationship('Transaction', back_populates='user', cascade='all, delete-orphan')
    goals = relationship('Goal', back_populates='user', cascade='all, delete-orphan')
    subscription_feedback = relationship('SubscriptionFeedback', back_populates='user', cascade='all, delete-orphan')


class Transaction(Base):
    """Financial transaction record."""
    __tablename__ = 'transactions'

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    date = Column(Date, nullable=False)
    description = Column(String(500), nullable=False)
    merchant = Column(String(200))
    amount = Column(Float, nullable=False)  # Negative = expense, Positive = income
    category = Column(String(100), nullable=False, default='Other')
    is_recurring = Column(Boolean, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship('User', back_populates='transactions')

    def to_dict(self):
        return {
            'id': self.id,
            'date': self.date.isoformat() if self.date else None,
            'description': self.description,
            'merchant': self.merchant,
            'amount': self.amount,
            'category': self.category,
        }


class Goal(Base):
    """Savings goal."""
    __tablename__ = 'goals'

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    name = Column(String(100), nullable=False)
    target_amount = Column(Float, nullable=False)
    current_amount = Column(Float, nullable=False, default=0)
    deadline = Column(Date)

    user = relationship('User', back_populates='goals')

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'target_amount': self.target_amount,
            'current_amount': self.current_amount,
            'deadline': self.deadline.isoformat() if self.deadline else None,
        }


class SubscriptionFeedback(Base):
    """User verdict on a detected subscription."""
    __tablename__ = 'subscription_feedback'

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    merchant = Column(String(200), nullable=False)
    is_false_positive = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship('User', back_populates='subscription_feedback')


# Database initialization
_engine = None
_Session = None


def get_engine(db_path=DB_PATH):
    """Get or create database engine."""
    global _engine
    if _engine is None:
        _engine = create_engine(f'sqlite:///{db_path}', echo=False)
    return _engine


def get_session():
    """Get a new database session."""
    global _Session
    if _Session is None:
        _Session = sessionmaker(bind=get_engine())
    return _Session()


def init_db(db_path=DB_PATH):
    """Initialize database tables and the default user."""
    global _engine, _Session
    _engine = create_engine(f'sqlite:///{db_path}', echo=False)
    _Session = sessionmaker(bind=_engine)

    Base.metadata.create_all(_engine)

    session = get_session()
    try:
        if not session.query(User).first():
            session.add(User(name='Default User'))
            session.commit()
    finally:
        session.close()
    return _engine


def load_goals(session, user_id=1):
    goals = session.query(Goal).filter_by(user_id=user_id).order_by(Goal.id).all()
    return [g.to_dict() for g in goals]


def load_dismissed_merchants(session, user_id=1):
    """Merchants the user has marked as not being a subscription."""
    rows = session.query(SubscriptionFeedback.merchant).filter_by(
        user_id=user_id, is_false_positive=True
    ).all()
    return {merchant for (merchant,) in rows}
