"""centralsync - Reconcile hosted RHACS Central instances against the ACS fleet manager."""

from .central import CentralInstance as CentralInstance
from .central import CentralInstanceObservation as CentralInstanceObservation
from .central import CentralInstanceParameters as CentralInstanceParameters
from .client import FleetManagerClient as FleetManagerClient
from .client import connect as connect
from .config import ProviderConfig as ProviderConfig
from .context import Context as Context
from .drift import is_up_to_date as is_up_to_date
from .external import CentralInstanceConnector as CentralInstanceConnector
from .external import CentralInstanceExternal as CentralInstanceExternal
from .reconciler import Action as Action
from .reconciler import Reconciler as Reconciler
from .resource import Managed as Managed
from .resource import kind as kind
from .status import Condition as Condition
from .status import map_status as map_status
from .workspace import Workspace as Workspace
