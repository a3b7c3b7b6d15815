"""
Hydraulics Module
Pipe velocity, friction loss table lookups and supply capacity
"""

import csv
import math
from pathlib import Path

DEFAULT_DATA_DIR = Path(__file__).parent / "data"

# Cubic feet per second -> gallons per minute
GPM_PER_CFS = 448.831


def calculate_velocity(gpm, inside_diameter_in):
    """
    Calculate water velocity in a pipe

    Args:
        gpm: Flow rate in gallons per minute
        inside_diameter_in: Inside diameter in inches

    Returns:
        Velocity in feet per second
    """
    area_ft2 = math.pi * (inside_diameter_in / 24) ** 2
    return (gpm / GPM_PER_CFS) / area_ft2


def flow_at_velocity(velocity_fps, inside_diameter_in):
    """Flow in GPM that produces the given velocity"""
    area_ft2 = math.pi * (inside_diameter_in / 24) ** 2
    return velocity_fps * area_ft2 * GPM_PER_CFS


class HydraulicTables:
    """PVC pipe capacity, friction loss and device loss tables"""

    def __init__(self, data_dir=None):
        """
        Initialize with hydraulic table data

        Args:
            data_dir: Directory containing CSV data files (defaults to the
                      tables shipped with the package)
        """
        self.data_dir = Path(data_dir) if data_dir else DEFAULT_DATA_DIR
        self.capacities = {}
        self.friction_loss = {}
        self.device_losses = {}
        self._load_data()

    def _load_data(self):
        """Load pipe capacity, friction loss and device loss tables from CSV"""
        capacity_path = self.data_dir / "pipe_capacities.csv"
        friction_path = self.data_dir / "pvc_friction_loss.csv"
        device_path = self.data_dir / "device_pressure_loss.csv"

        for csv_path in (capacity_path, friction_path, device_path):
            if not csv_path.exists():
                raise FileNotFoundError(f"Hydraulic table not found at {csv_path}")

        with open(capacity_path, 'r') as f:
            reader = csv.DictReader(f)
            for row in reader:
                size_in = float(row['size_in'])
                self.capacities[size_in] = {
                    'material': row['material'],
                    'inside_diameter_in': float(row['inside_diameter_in']),
                    'max_gpm': float(row['max_gpm']),
                    'max_gpm_at_5fps': float(row['max_gpm_at_5fps'])
                }

        with open(friction_path, 'r') as f:
            reader = csv.DictReader(f)
            for row in reader:
                size_in = float(row['pipe_size_in'])
                self.friction_loss.setdefault(size_in, []).append(
                    (float(row['gpm']), float(row['friction_loss_per_100ft']))
                )

        for entries in self.friction_loss.values():
            entries.sort()

        with open(device_path, 'r') as f:
            reader = csv.DictReader(f)
            for row in reader:
                by_size = self.device_losses.setdefault(row['device'], {})
                by_size[float(row['size_in'])] = float(row['pressure_loss_psi'])

    def get_pipe_capacity(self, size_in):
        return self.capacities.get(float(size_in))

    def inside_diameter(self, size_in):
        """
        Inside diameter for a nominal pipe size

        Args:
            size_in: Nominal size in inches

        Returns:
            Inside diameter in inches, or the nominal size when the table
            has no entry for it
        """
        capacity = self.get_pipe_capacity(size_in)
        if capacity is None:
            return float(size_in)
        return capacity['inside_diameter_in']

    def lookup_friction_loss(self, size_in, gpm):
        """
        Friction loss per 100 ft, linearly interpolated between table rows

        Flows outside the table range are clamped to the nearest row.

        Args:
            size_in: Nominal pipe size in inches
            gpm: Flow rate

        Returns:
            PSI lost per 100 ft, or None for sizes not in the table
        """
        entries = self.friction_loss.get(float(size_in))
        if not entries:
            return None

        if gpm <= entries[0][0]:
            return entries[0][1]
        if gpm >= entries[-1][0]:
            return entries[-1][1]

        for (low_gpm, low_loss), (high_gpm, high_loss) in zip(entries, entries[1:]):
            if low_gpm <= gpm <= high_gpm:
                if high_gpm == low_gpm:
                    return low_loss
                ratio = (gpm - low_gpm) / (high_gpm - low_gpm)
                return low_loss + ratio * (high_loss - low_loss)

        return entries[-1][1]

    def pipe_pressure_loss(self, size_in, gpm, length_ft):
        """Pressure lost over a run of pipe, in PSI (None for unknown sizes)"""
        per_100ft = self.lookup_friction_loss(size_in, gpm)
        if per_100ft is None:
            return None
        return per_100ft * length_ft / 100

    def supply_capacity_gpm(self, supply_size_in, max_velocity_fps):
        """
        Largest flow a supply line can deliver without exceeding a velocity

        Args:
            supply_size_in: Nominal supply pipe size
            max_velocity_fps: Velocity limit

        Returns:
            Flow in GPM
        """
        return flow_at_velocity(max_velocity_fps, self.inside_diameter(supply_size_in))

    def device_pressure_loss(self, device, size_in):
        """
        Pressure lost through an inline device

        Sizes missing from the table use the closest listed size.

        Args:
            device: 'rpz' (backflow preventer) or 'meter'
            size_in: Nominal device size in inches

        Returns:
            PSI lost at design flow, or 0.0 for unknown devices
        """
        by_size = self.device_losses.get(device)
        if not by_size:
            return 0.0
        size_in = float(size_in)
        if size_in in by_size:
            return by_size[size_in]
        closest = min(by_size, key=lambda listed: abs(listed - size_in))
        return by_size[closest]
