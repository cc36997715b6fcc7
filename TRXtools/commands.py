from TRX.main import main
from TRXIO.hdf import HDF5
from TRXIO.io import IOManager
from TRXIO.protocols import Category


def run(h5file, restart_in=None, restart_out=None):
    """Run a TRX chemical transport scenario.

    Parameters
    ----------
    h5file: str
        HDF5 (path) filename used for both input and output.
    restart_in: str
        [optional] Default is None.
        Directory of restart grids used as initial concentrations.
    restart_out: str
        [optional] Default is None.
        Directory receiving restart grids of the final concentrations.
    """
    with HDF5(h5file) as hdf5_instance:
        io_manager = IOManager(hdf5_instance)
        main(io_manager, restart_in=restart_in, restart_out=restart_out)


def massbalance(h5file, domain="OVERLAND"):
    """Print the cumulative mass balance (kg) saved by a run.

    Parameters
    ----------
    h5file: str
        HDF5 (path) filename of a completed run.
    domain: str
        [optional] Default is OVERLAND.
        OVERLAND or CHANNEL.
    """
    with HDF5(h5file) as hdf5_instance:
        table = hdf5_instance.read_table(Category.RESULTS, domain.upper(), "ALL", "MASSBALANCE")
    if table.empty:
        raise ValueError(f"{h5file} holds no {domain.upper()} mass balance; run the scenario first")
    print(table.T.to_string())
    return table
