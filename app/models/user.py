from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, CheckConstraint
from app.db.session import Base

class User(Base):
    """Citizen credential row. `role` may be 'authority' for citizen-table authorities."""
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="user")
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (CheckConstraint("role IN ('user', 'authority')", name="ck_users_role"), )
