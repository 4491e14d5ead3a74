from globetrekker.core.database import Base

from .subscriber import Subscriber
from .registration import Registration
from .user import User
