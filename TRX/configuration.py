''' Copyright (c) 2020 by RESPEC, INC.
Author: Robert Heaphy, Ph.D.
License: LGPL2
'''

# new process modules must be added here and in *activities* below
from TRX.PARTITION import partition
from TRX.KINETICS import kinetics, dissolution
from TRX.YIELD import yields
from TRX.INFILT import infiltration
from TRX.EROSION import deposition, erosion
from TRX.ADVECT import advection
from TRX.DISPERSE import dispersion
from TRX.FLOODPL import floodplain
from TRX.CONCENTRATION import concentration


# Note: This is the ONLY place in TRX that defines process execution order
# CONCENTRATION entries are keyed by the domain they integrate
activities = {
  'OVERLAND': {'PARTITION':partition, 'KINETICS':kinetics, 'DISSOLUTION':dissolution,
     'YIELD':yields, 'INFILTRATION':infiltration, 'DEPOSITION':deposition,
     'ADVECTION':advection, 'DISPERSION':dispersion, 'EROSION':erosion},
  'CHANNEL': {'PARTITION':partition, 'KINETICS':kinetics, 'DISSOLUTION':dissolution,
     'YIELD':yields, 'TRANSMISSION':infiltration, 'DEPOSITION':deposition,
     'ADVECTION':advection, 'DISPERSION':dispersion, 'EROSION':erosion},
  'FLOODPLAIN': {'TRANSFER':floodplain},
  'CONCENTRATION': {'OVERLAND':concentration, 'CHANNEL':concentration}}
