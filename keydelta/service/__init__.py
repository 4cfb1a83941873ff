from keydelta.service.compare import *
