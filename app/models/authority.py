from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime
from app.db.session import Base

class Authority(Base):
    # role is implied by the table: always "authority"
    __tablename__ = "authorities"
    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
