from sqlalchemy import Column, Integer, String, Boolean, Text, TIMESTAMP, CheckConstraint
from sqlalchemy.sql import func
from ..database import Base


class User(Base):
    __tablename__ = "users"
    
    # Primary Key
    id = Column(Integer, primary_key=True, index=True)
    
    # Authentication & Contact
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(50), nullable=False)
    
    # Role & Authorization
    role = Column(String(50), nullable=False, default="user", index=True)
    
    # Profile
    avatar = Column(String(500))
    bio = Column(Text)
    
    # Account Status
    is_active = Column(Boolean, default=True, index=True)
    
    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())
    
    # Constraints
    __table_args__ = (
        CheckConstraint(
            "role IN ('user', 'moderator', 'admin')",
            name="check_user_role"
        ),
    )
