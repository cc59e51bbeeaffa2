"""Basic example of using the manifold simulator."""

from manifold_sim import Simulator
from manifold_sim.physics.integrators import RK4Integrator
from manifold_sim.presets import DoublePendulum

def main():
    """Run a double pendulum released from horizontal."""
    # Create a double pendulum preset with standard gravity
    preset = DoublePendulum(gravity=9.81)
    
    # Generate configuration and initial conditions
    config, state = preset.generate()
    
    # Create simulator with RK4 integrator
    sim = Simulator(
        config,
        RK4Integrator(),
        dt=0.001,
        batch_size=100
    )
    
    # Initialize simulation
    sim.initialize(state.q, state.v)
    
    # Run simulation
    print("Running simulation...")
    print(f"Initial energy: {sim.get_energy():.6f}")
    
    for batch in range(10):
        sim.advance()
        q, v, time, steps = sim.get_state()
        print(f"Step {steps}: Time={time:.2f}, q=({q[0]:.3f}, {q[1]:.3f}), "
              f"dE/E0={sim.get_energy_error():.2e}")
    
    print(f"Final energy: {sim.get_energy():.6f}")
    print("Simulation complete!")

if __name__ == "__main__":
    main()
