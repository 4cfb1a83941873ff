from keydelta.data.delta import *
from keydelta.data.delta_summary import *
from keydelta.data.equivalence import *
from keydelta.data.error import *
from keydelta.data.natural_key import *
from keydelta.data.op_type import *
from keydelta.data.operation import *
from keydelta.data.row_spec import *
